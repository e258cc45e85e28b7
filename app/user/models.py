from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    이메일로 로그인하는 계정. username 은 가입 시 이메일로 채웁니다.
    """

    email = models.EmailField(unique=True)
    display_name = models.CharField(max_length=150, blank=True, default="")
