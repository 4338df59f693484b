"""
Production entry point.

Run with: gunicorn -k eventlet -w 1 wsgi:app

Monkey patching has to happen before anything else is imported so the
grace-window timers and room locks become green threads.
"""

import eventlet
eventlet.monkey_patch()

from app import configure_logging, create_app  # noqa: E402

configure_logging()
app, socketio = create_app({'ASYNC_MODE': 'eventlet'})
