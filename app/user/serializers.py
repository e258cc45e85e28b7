from django.contrib.auth import authenticate
from rest_framework import serializers
from user.models import User


class UserRegistrationSerializer(serializers.ModelSerializer):
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="최소 8자 이상의 비밀번호를 입력하세요.",
    )
    name = serializers.CharField(
        source="display_name", max_length=150, required=False, allow_blank=True
    )

    class Meta:
        model = User
        fields = ["id", "email", "password", "name"]
        read_only_fields = ["id"]

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("이미 가입된 이메일입니다.")
        return value

    def validate_password(self, value):
        if value.isdigit():
            raise serializers.ValidationError(
                "비밀번호는 숫자만으로 구성될 수 없습니다."
            )
        if value.isalpha():
            raise serializers.ValidationError(
                "비밀번호는 문자만으로 구성될 수 없습니다."
            )
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data["email"],
            email=validated_data["email"],
            password=validated_data["password"],
            display_name=validated_data.get("display_name", ""),
        )


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        email = data["email"].strip().lower()
        account = User.objects.filter(email__iexact=email).first()
        user = None
        if account is not None:
            user = authenticate(
                request=self.context.get("request"),
                username=account.username,
                password=data["password"],
            )
        if not user:
            raise serializers.ValidationError("Invalid credentials")

        data["user"] = user
        return data


class CurrentUserSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="display_name")

    class Meta:
        model = User
        fields = ["id", "email", "name"]
