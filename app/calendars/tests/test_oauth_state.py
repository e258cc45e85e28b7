import re

from calendars.domain.oauth_state import generate_state

URL_SAFE = re.compile(r"^[A-Za-z0-9_-]+$")


def test_generated_states_do_not_repeat():
    previous = generate_state()
    seen = {previous}
    for _ in range(10_000):
        current = generate_state()
        assert current != previous
        seen.add(current)
        previous = current
    assert len(seen) == 10_001


def test_state_is_url_safe_without_padding():
    state = generate_state()
    assert URL_SAFE.match(state)
    assert "=" not in state
    # 32 bytes base64url -> 43 chars (>= 128 bits)
    assert len(state) >= 43
