# Gunicorn configuration for the blog API
# Run with: gunicorn -c gunicorn.conf.py

import multiprocessing
import os

wsgi_app = "blogapi:create_app()"

bind = os.getenv("GUNICORN_BIND", "127.0.0.1:3001")
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", "4"))

timeout = int(os.getenv("GUNICORN_TIMEOUT", "30"))
graceful_timeout = 20
keepalive = 5
max_requests = 2000
max_requests_jitter = 200
preload_app = True

# Reverse proxy in front terminates TLS and sets X-Forwarded-*
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

# Headers only; bodies are capped by MAX_CONTENT_LENGTH in the app
limit_request_line = 4096
limit_request_fields = 100
limit_request_field_size = 8190

if hasattr(os, "geteuid") and os.geteuid() == 0:
    user = os.getenv("GUNICORN_USER", "blogapi")
    group = os.getenv("GUNICORN_GROUP", "blogapi")

# The app writes its own structured access log to stdout
accesslog = os.getenv("GUNICORN_ACCESS_LOG")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")

worker_tmp_dir = "/dev/shm"


def post_fork(server, worker):
    # Pooled connections opened in the master during preload are not fork safe
    from blogapi.extensions import db

    app = server.app.wsgi()
    with app.app_context():
        db.engine.dispose(close=False)
