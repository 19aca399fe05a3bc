import os

wsgi_app = "vst_library.app:create_app()"

# The desktop shell talks to the backend over loopback only
bind = os.getenv("VST_LIBRARY_BIND", "127.0.0.1:5000")

# One worker owns the single database connection
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", 4))
worker_class = "gthread"
timeout = int(os.getenv("SCANNER_TIMEOUT_SECONDS", 300)) + 30
keepalive = 5

# Logging
accesslog = "-"  # stdout
errorlog = "-"  # stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# For development with reload
reload = os.getenv("VST_LIBRARY_ENV") == "development"
