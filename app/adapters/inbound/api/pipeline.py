# app/adapters/inbound/api/pipeline.py

"""
Body sanitization and validation stages of the request pipeline.

``validated_body(rules)`` reads the raw JSON body, escapes every string in
it and checks it against a rule set before any other dependency of the
route runs. The sanitized mapping is what the endpoint receives.
"""

import json
import logging
from typing import Any, Callable, Dict

from fastapi import Request

from app.domain.exceptions import ValidationException
from app.shared.utils.input_validation import InputValidator, AUTH_RULES, LOGIN_RULES, PRODUCT_RULES

# Configure logger
logger = logging.getLogger(__name__)


def validated_body(rules: Dict[str, Callable]) -> Callable:
    """
    Build a dependency that sanitizes then validates the request body.

    Args:
        rules: Mapping of field name to validator, see InputValidator

    Returns:
        Dependency returning the sanitized body as a dict
    """

    async def dependency(request: Request) -> Dict[str, Any]:
        raw = await request.body()
        if not raw:
            data: Any = {}
        else:
            try:
                data = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError):
                raise ValidationException(detail="Request body must be valid JSON")

        if not isinstance(data, dict):
            raise ValidationException(detail="Request body must be a JSON object")

        data = InputValidator.sanitize(data)

        error = InputValidator.first_error(data, rules)
        if error:
            logger.info(f"Validation failed on {request.method} {request.url.path}: {error}")
            raise ValidationException(detail=error)

        return data

    return dependency


auth_body = validated_body(AUTH_RULES)
login_body = validated_body(LOGIN_RULES)
product_body = validated_body(PRODUCT_RULES)
