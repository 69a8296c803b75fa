"""
Security middleware for the Flask application.
"""
import os


def add_security_headers(response):
    """Add security headers to all responses."""
    # API responses are JSON only
    response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"

    # Prevent clickjacking
    response.headers['X-Frame-Options'] = 'DENY'

    # Prevent MIME type sniffing
    response.headers['X-Content-Type-Options'] = 'nosniff'

    response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

    # OTP responses must never be cached
    response.headers['Cache-Control'] = 'no-store'

    # HSTS (only in production with HTTPS)
    if os.getenv('FLASK_ENV') == 'production' or os.getenv('ENVIRONMENT') == 'production':
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

    return response
