"""
Gunicorn production configuration for the bowling community backend.

OTP codes live in process memory, so this runs exactly one worker process
and scales with threads instead.
"""
import os

# Server socket
bind = f"{os.getenv('FLASK_HOST', '0.0.0.0')}:{os.getenv('FLASK_PORT', '10000')}"
backlog = 2048

# One process only: a code issued by one worker would not validate on another.
workers = 1
worker_class = 'gthread'
threads = int(os.getenv('GUNICORN_THREADS', 8))

# Restarting the worker would drop every outstanding OTP
max_requests = 0

timeout = 30
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'warning').lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

proc_name = 'bowling-community-backend'

daemon = False
pidfile = None
umask = 0

preload_app = True


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Gunicorn server ready to accept connections")


def post_worker_init(worker):
    """Called just after a worker has initialized the application."""
    worker.log.info(f"Worker initialized (pid: {worker.pid})")


def on_exit(server):
    """Called just before exiting Gunicorn."""
    server.log.info("Shutting down Gunicorn server, outstanding OTPs are discarded")


# Security
limit_request_line = 4096
limit_request_fields = 100
limit_request_field_size = 8190
