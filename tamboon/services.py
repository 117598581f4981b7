"""HTTP services that create card tokens and charges against the payment API."""

from __future__ import annotations

import json
import os

import requests

from .ratelimit import RateLimiter, call_with_rate_limit
from .settings import (
    CURRENCY,
    DEFAULT_CHARGE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TOKEN_URL,
    RETURN_URI,
    ClientConfig,
)

UNKNOWN_ERROR = "unknown error"

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_BAD_REQUEST_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
)


class OmiseError(Exception):
    """Raised when a request to the payment API fails."""


def parse_omise_error(body) -> str:
    """Extract the message from an API error body, or ``"unknown error"``."""
    try:
        payload = json.loads(body)
    except (ValueError, TypeError):
        return UNKNOWN_ERROR
    if isinstance(payload, dict) and payload.get("object") == "error":
        message = payload.get("message")
        if isinstance(message, str):
            return message
    return UNKNOWN_ERROR


def _post_form(url: str, fields: dict[str, str], key: str, what: str) -> bytes:
    """POST ``fields`` as a form with basic auth and return the body of a 200 reply."""
    try:
        response = requests.post(
            url,
            data=sorted(fields.items()),
            headers={"Content-Type": _FORM_CONTENT_TYPE},
            auth=(key, ""),
        )
    except _BAD_REQUEST_ERRORS as exc:
        raise OmiseError(f"error creating {what}: {exc}") from exc
    except requests.RequestException as exc:
        raise OmiseError(f"error making {what}: {exc}") from exc
    if response.status_code != 200:
        raise OmiseError(f"API error: {parse_omise_error(response.content)}")
    return response.content


class TokenService:
    """Creates card tokens."""

    def __init__(
        self, token_url: str = DEFAULT_TOKEN_URL, max_retries: int = DEFAULT_MAX_RETRIES
    ) -> None:
        self.token_url = token_url
        self.max_retries = max_retries

    @classmethod
    def from_env(cls) -> "TokenService":
        """Build a service from ``OMISE_TOKEN_URL`` and ``MAX_RETRIES``."""
        return cls(
            os.environ.get("OMISE_TOKEN_URL") or DEFAULT_TOKEN_URL,
            ClientConfig.from_env().max_retries,
        )

    def create_token(
        self, name: str, cc_number: str, cvv: str, exp_month: str, exp_year: str
    ) -> str:
        """Tokenize a card and return the token id."""
        fields = {
            "card[name]": name,
            "card[number]": cc_number,
            "card[security_code]": cvv,
            "card[expiration_month]": exp_month,
            "card[expiration_year]": exp_year,
        }
        body = _post_form(
            self.token_url, fields, os.environ.get("OMISE_PKEY", ""), "request"
        )
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise OmiseError(f"error parsing token response: {exc}") from exc
        if not isinstance(payload, dict):
            raise OmiseError("error parsing token response: not an object")
        token_id = payload.get("id")
        if not isinstance(token_id, str):
            raise OmiseError("error extracting token ID from response")
        return token_id

    def create_token_with_rate_limit(
        self,
        name: str,
        cc_number: str,
        cvv: str,
        exp_month: str,
        exp_year: str,
        limiter: RateLimiter,
    ) -> str:
        """Like :meth:`create_token`, retrying while the API reports a rate limit."""
        return call_with_rate_limit(
            lambda: self.create_token(name, cc_number, cvv, exp_month, exp_year),
            limiter,
            self.max_retries,
        )


class ChargeService:
    """Creates charges against card tokens."""

    def __init__(
        self,
        charge_url: str = DEFAULT_CHARGE_URL,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self.charge_url = charge_url
        self.max_retries = max_retries

    @classmethod
    def from_env(cls) -> "ChargeService":
        """Build a service from ``OMISE_CHARGE_URL`` and ``MAX_RETRIES``."""
        return cls(
            os.environ.get("OMISE_CHARGE_URL") or DEFAULT_CHARGE_URL,
            ClientConfig.from_env().max_retries,
        )

    def create_charge(self, amount, token_id: str, description: str) -> None:
        """Charge ``amount`` satang to the card behind ``token_id``."""
        fields = {
            "description": description,
            "amount": str(amount),
            "currency": CURRENCY,
            "return_uri": RETURN_URI,
            "card": token_id,
        }
        _post_form(
            self.charge_url, fields, os.environ.get("OMISE_SKEY", ""), "charge request"
        )

    def create_charge_with_rate_limit(
        self, amount, token_id: str, description: str, limiter: RateLimiter
    ) -> None:
        """Like :meth:`create_charge`, retrying while the API reports a rate limit."""
        call_with_rate_limit(
            lambda: self.create_charge(amount, token_id, description),
            limiter,
            self.max_retries,
        )