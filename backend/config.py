import os

_DEFAULT_ORIGINS = 'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174'

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ALLOWED_ORIGINS = [o.strip() for o in os.environ.get('CORS_ALLOWED_ORIGINS', _DEFAULT_ORIGINS).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Drop a waiting player from the queue after this many seconds. 0 waits forever.
    MATCHMAKING_TIMEOUT_SEC = float(os.environ.get('MATCHMAKING_TIMEOUT_SEC', '0'))
    # Emit an 'error' event back to the sender for rejected actions. Off keeps them silent.
    EMIT_REJECTIONS = os.environ.get('EMIT_REJECTIONS', '0').lower() in ('1', 'true', 'yes')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '5000'))
