# app/shared/utils/input_validation.py

import re
from typing import Any, Callable, Dict, Optional, Tuple


class InputValidator:
    """
    Sanitization and validation of request payloads before any handler runs.

    Sanitization neutralizes markup in every string; validation applies a
    per-route rule set and stops at the first violated constraint.
    """

    # Limits
    USERNAME_MIN_LENGTH = 3
    USERNAME_MAX_LENGTH = 50
    MIN_PASSWORD_LENGTH = 6
    PRODUCT_NAME_MIN_LENGTH = 2
    PRODUCT_NAME_MAX_LENGTH = 100
    CATEGORY_MAX_LENGTH = 50

    # Patterns
    USERNAME_PATTERN = re.compile(r'^[A-Za-z0-9_]+$')
    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
    INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')

    # Markup-significant characters and their entity replacements
    ESCAPE_TABLE = str.maketrans({
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    })

    @classmethod
    def escape(cls, text: str) -> str:
        """Replace markup-significant characters by HTML entities."""
        return text.translate(cls.ESCAPE_TABLE)

    @classmethod
    def sanitize_string(cls, text: str) -> str:
        """Trim surrounding whitespace and escape markup."""
        return cls.escape(text.strip())

    @classmethod
    def sanitize(cls, value: Any) -> Any:
        """
        Recursively sanitize a payload.

        Strings are trimmed and escaped, mappings and lists are walked,
        any other value is returned untouched.

        Args:
            value: Decoded JSON payload (or any nested part of it)

        Returns:
            Sanitized copy of the payload
        """
        if isinstance(value, str):
            return cls.sanitize_string(value)
        if isinstance(value, dict):
            return {key: cls.sanitize(item) for key, item in value.items()}
        if isinstance(value, list):
            return [cls.sanitize(item) for item in value]
        return value

    @classmethod
    def check_length(cls, value: Any, min_length: int = 0, max_length: Optional[int] = None) -> bool:
        if not isinstance(value, str):
            return False
        if len(value) < min_length:
            return False
        return max_length is None or len(value) <= max_length

    @classmethod
    def is_non_negative_number(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        try:
            number = float(str(value))
        except (TypeError, ValueError):
            return False
        # NaN fails the comparison, infinity is rejected explicitly
        return number >= 0 and number != float("inf")

    @classmethod
    def is_non_negative_integer(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if not cls.INTEGER_PATTERN.match(str(value)):
            return False
        return int(str(value)) >= 0

    @classmethod
    def validate_username(cls, username: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate a username.

        Returns:
            Tuple (valid, error_message)
        """
        if not cls.check_length(username, cls.USERNAME_MIN_LENGTH, cls.USERNAME_MAX_LENGTH):
            return False, (f"Username must be between {cls.USERNAME_MIN_LENGTH} "
                           f"and {cls.USERNAME_MAX_LENGTH} characters")
        if not cls.USERNAME_PATTERN.match(username):
            return False, "Username can only contain letters, numbers, and underscores"
        return True, None

    @classmethod
    def validate_email(cls, email: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate email format.

        Returns:
            Tuple (valid, error_message)
        """
        if not isinstance(email, str) or not cls.EMAIL_PATTERN.match(email):
            return False, "Please provide a valid email address"
        return True, None

    @classmethod
    def validate_password(cls, password: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate password length.

        Returns:
            Tuple (valid, error_message)
        """
        if not cls.check_length(password, cls.MIN_PASSWORD_LENGTH):
            return False, f"Password must be at least {cls.MIN_PASSWORD_LENGTH} characters long"
        return True, None

    @classmethod
    def validate_product_name(cls, name: Any) -> Tuple[bool, Optional[str]]:
        if not cls.check_length(name, cls.PRODUCT_NAME_MIN_LENGTH, cls.PRODUCT_NAME_MAX_LENGTH):
            return False, (f"Product name must be between {cls.PRODUCT_NAME_MIN_LENGTH} "
                           f"and {cls.PRODUCT_NAME_MAX_LENGTH} characters")
        return True, None

    @classmethod
    def validate_price(cls, price: Any) -> Tuple[bool, Optional[str]]:
        if not cls.is_non_negative_number(price):
            return False, "Price must be a positive number"
        return True, None

    @classmethod
    def validate_stock(cls, stock: Any) -> Tuple[bool, Optional[str]]:
        if not cls.is_non_negative_integer(stock):
            return False, "Stock must be a non-negative integer"
        return True, None

    @classmethod
    def validate_category(cls, category: Any) -> Tuple[bool, Optional[str]]:
        if not cls.check_length(category, 0, cls.CATEGORY_MAX_LENGTH):
            return False, f"Category must be less than {cls.CATEGORY_MAX_LENGTH} characters"
        return True, None

    @classmethod
    def first_error(
            cls,
            data: Dict[str, Any],
            rules: Dict[str, Callable[[Any], Tuple[bool, Optional[str]]]],
    ) -> Optional[str]:
        """
        Validate a payload against a rule set.

        Only fields present in the payload (and not null) are checked, so
        partial updates skip absent fields. Rules run in declaration order.

        Args:
            data: Sanitized payload
            rules: {field: validator} mapping

        Returns:
            Message of the first violated constraint, or None if everything is valid
        """
        for field, validator in rules.items():
            if field not in data or data[field] is None:
                continue
            is_valid, error_msg = validator(data[field])
            if not is_valid:
                return error_msg
        return None


# Rule sets per route family
AUTH_RULES = {
    "username": InputValidator.validate_username,
    "email": InputValidator.validate_email,
    "password": InputValidator.validate_password,
    "newPassword": InputValidator.validate_password,
}

PRODUCT_RULES = {
    "name": InputValidator.validate_product_name,
    "price": InputValidator.validate_price,
    "stock": InputValidator.validate_stock,
    "category": InputValidator.validate_category,
}

# Login checks an existing password, so the length policy for new passwords does not apply
LOGIN_RULES = {
    "username": InputValidator.validate_username,
}
