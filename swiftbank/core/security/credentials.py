"""Login input and password strength checks."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9._@-]+$")
SPECIAL_CHARS = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8


@dataclass
class LoginInputCheck:
    is_valid: bool
    sanitized_username: str
    errors: List[str] = field(default_factory=list)


@dataclass
class PasswordStrength:
    score: int
    strength: str
    checks: Dict[str, bool]

    @property
    def is_valid(self) -> bool:
        return self.score >= 3


def validate_login_input(username: Optional[str], password: Optional[str]) -> LoginInputCheck:
    errors = []

    if not username or not password:
        errors.append("Username and password are required")
    if username and len(username) < MIN_USERNAME_LENGTH:
        errors.append(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    sanitized = username.strip().lower() if username else ""
    if username and not USERNAME_PATTERN.match(sanitized):
        errors.append("Username contains invalid characters")

    return LoginInputCheck(is_valid=not errors, sanitized_username=sanitized, errors=errors)


def validate_password_strength(password: str) -> PasswordStrength:
    """Score a password 0-5 on length and character classes."""
    password = password or ""
    checks = {
        "length": len(password) >= MIN_PASSWORD_LENGTH,
        "uppercase": bool(re.search(r"[A-Z]", password)),
        "lowercase": bool(re.search(r"[a-z]", password)),
        "numbers": bool(re.search(r"\d", password)),
        "special": bool(SPECIAL_CHARS.search(password)),
    }
    score = sum(checks.values())

    if score >= 4:
        strength = "Strong"
    elif score >= 3:
        strength = "Medium"
    elif score >= 2:
        strength = "Weak"
    else:
        strength = "Very Weak"

    return PasswordStrength(score=score, strength=strength, checks=checks)
