"""
Gunicorn configuration for the Wordle Escrow API.

    gunicorn -c gunicorn.conf.py

Env vars that override defaults:
  PORT     - TCP port to bind (default: 8000)
  WORKERS  - number of worker processes (default: 2)
"""
import os

wsgi_app = "app.main:app"
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"
workers = int(os.environ.get("WORKERS", "2"))
worker_class = "uvicorn.workers.UvicornWorker"

# Import the app once in the master so a bad DATABASE_URL fails at boot.
preload_app = True

keepalive = 5
timeout = 60
graceful_timeout = 30

# Recycle workers now and then; the recap client keeps no long-lived state.
max_requests = 1000
max_requests_jitter = 100

loglevel = "info"
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'


def post_fork(server, worker):
    # Connections opened in the master must not be shared with workers
    from app.db.base import engine

    engine.dispose(close=False)
