# Gunicorn configuration
# gunicorn -c deploy/gunicorn.conf.py "contest_sniffer:create_app('production')"
import multiprocessing

bind = "127.0.0.1:8000"
workers = multiprocessing.cpu_count() + 1
# Source fetches run in their own threads; a request waits for the slowest one
worker_class = "sync"
timeout = 75
keepalive = 5
errorlog = "/var/log/oi-contest-sniffer/gunicorn-error.log"
accesslog = "/var/log/oi-contest-sniffer/gunicorn-access.log"
loglevel = "info"
