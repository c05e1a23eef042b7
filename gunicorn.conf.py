# gunicorn.conf.py
# gunicorn -c gunicorn.conf.py
import os

wsgi_app = "evictiontracker.main:app"
bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"
worker_class = "uvicorn.workers.UvicornWorker"

# The intake engine is stateless; scale out with processes
workers = int(os.getenv("WEB_CONCURRENCY", "2"))
preload_app = True  # ruleset is loaded and validated once, before forking

timeout = 30
graceful_timeout = 10
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
