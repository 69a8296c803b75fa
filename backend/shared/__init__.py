"""
Shared utilities and common functionality for the bowling community backend.
"""
from flask import current_app

from .storage import (
    OTPStore,
    OTPRecord,
    InvalidArgumentError,
    generate_otp,
    is_well_formed_code,
)


def get_otp_store() -> OTPStore:
    """Return the OTP store owned by the running application."""
    return current_app.extensions['otp_store']


__all__ = [
    'OTPStore',
    'OTPRecord',
    'InvalidArgumentError',
    'generate_otp',
    'is_well_formed_code',
    'get_otp_store'
]
