"""
Security tests for the bowling community backend.
"""
import unittest
import os
import sys
from unittest.mock import patch

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from middleware.security import add_security_headers


class TestSecurityHeaders(unittest.TestCase):
    """Test security headers middleware."""

    def make_client(self):
        from flask import Flask
        app = Flask(__name__)

        @app.route('/test')
        def test():
            return {'status': 'ok'}

        app.after_request(add_security_headers)
        return app.test_client()

    def test_security_headers_added(self):
        """Test that security headers are added to response."""
        with self.make_client() as client:
            response = client.get('/test')

            self.assertEqual(response.headers['X-Frame-Options'], 'DENY')
            self.assertEqual(response.headers['X-Content-Type-Options'], 'nosniff')
            self.assertEqual(response.headers['Cache-Control'], 'no-store')
            self.assertIn('Content-Security-Policy', response.headers)
            self.assertNotIn('Strict-Transport-Security', response.headers)

    @patch.dict(os.environ, {'FLASK_ENV': 'production'})
    def test_hsts_in_production(self):
        """Test that HSTS is only sent in production."""
        with self.make_client() as client:
            response = client.get('/test')
            self.assertIn('Strict-Transport-Security', response.headers)


class TestJWTUtils(unittest.TestCase):
    """Test token generation and verification."""

    def test_round_trip(self):
        from utils.jwt_utils import generate_access_token, verify_token

        token = generate_access_token('secret', 'pat', 'pat@example.com', username='pat')
        payload = verify_token('secret', token)
        self.assertEqual(payload['email'], 'pat@example.com')
        self.assertEqual(payload['type'], 'access')

    def test_wrong_secret(self):
        from utils.jwt_utils import generate_access_token, verify_token

        token = generate_access_token('secret', 'pat', 'pat@example.com')
        self.assertIsNone(verify_token('other-secret', token))

    def test_wrong_token_type(self):
        from utils.jwt_utils import generate_access_token, verify_token

        token = generate_access_token('secret', 'pat', 'pat@example.com')
        self.assertIsNone(verify_token('secret', token, token_type='refresh'))

    def test_expired_token(self):
        from utils.jwt_utils import generate_access_token, verify_token

        token = generate_access_token('secret', 'pat', 'pat@example.com', expires_in=-10)
        self.assertIsNone(verify_token('secret', token))

    def test_missing_secret(self):
        from utils.jwt_utils import generate_access_token, verify_token

        with self.assertRaises(ValueError):
            generate_access_token('', 'pat', 'pat@example.com')
        self.assertIsNone(verify_token('', 'token'))


if __name__ == '__main__':
    unittest.main()
