"""
Server-side session storage.

The browser only ever holds an opaque token. The claims behind it
(account id, username, role) live in a ``SessionStore`` keyed by that
token, so logging out deletes the record and the token stops resolving
immediately.
"""

from __future__ import annotations

import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Protocol

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict


def _now():
    return datetime.now(timezone.utc)


class SessionStore(Protocol):
    """Capability the session interface needs from a backing store."""

    def get(self, token: str) -> dict | None:
        ...

    def put(self, token: str, data: dict, lifetime: timedelta) -> None:
        ...

    def delete(self, token: str) -> None:
        ...

    def touch(self, token: str, lifetime: timedelta) -> bool:
        ...


class InMemorySessionStore(SessionStore):
    """Process-local store. Records vanish on restart and expire lazily."""

    def __init__(self, clock=_now):
        self._records = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, token):
        with self._lock:
            record = self._records.get(token)
            if record is None:
                return None
            data, expires_at = record
            if expires_at <= self._clock():
                del self._records[token]
                return None
            return dict(data)

    def put(self, token, data, lifetime):
        with self._lock:
            self._records[token] = (dict(data), self._clock() + lifetime)

    def delete(self, token):
        with self._lock:
            self._records.pop(token, None)

    def touch(self, token, lifetime):
        with self._lock:
            record = self._records.get(token)
            if record is None or record[1] <= self._clock():
                self._records.pop(token, None)
                return False
            self._records[token] = (record[0], self._clock() + lifetime)
            return True

    def __len__(self):
        with self._lock:
            return len(self._records)


class ServerSideSession(CallbackDict, SessionMixin):
    """Flask session whose contents stay on the server."""

    def __init__(self, initial=None, token=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.token = token
        self.new = new
        self.modified = False
        self.retired_tokens = []

    def rotate(self):
        """Issue a fresh token on the next save and retire the current one."""
        if self.token is not None:
            self.retired_tokens.append(self.token)
        self.token = None
        self.modified = True

    def terminate(self):
        """Drop every claim and retire the token."""
        self.clear()
        self.rotate()


class ServerSideSessionInterface(SessionInterface):
    """Bridge between Flask's ``session`` object and a SessionStore."""

    session_class = ServerSideSession

    def __init__(self, store: SessionStore, token_bytes=32):
        self.store = store
        self.token_bytes = token_bytes

    def generate_token(self):
        return secrets.token_urlsafe(self.token_bytes)

    def open_session(self, app, request):
        token = request.cookies.get(self.get_cookie_name(app))
        if token:
            data = self.store.get(token)
            if data is not None:
                return self.session_class(data, token=token)
        # Missing, expired or terminated token: anonymous
        return self.session_class(new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        lifetime = app.permanent_session_lifetime

        for token in session.retired_tokens:
            self.store.delete(token)
        had_cookie = bool(session.retired_tokens) or not session.new

        if not session:
            if session.token is not None:
                self.store.delete(session.token)
            if had_cookie:
                self._delete_cookie(app, response)
            return

        if session.token is None:
            session.token = self.generate_token()
            self.store.put(session.token, dict(session), lifetime)
        elif session.modified:
            self.store.put(session.token, dict(session), lifetime)
        elif not self.store.touch(session.token, lifetime):
            # Terminated elsewhere while this request ran; do not resurrect it
            self._delete_cookie(app, response)
            return

        response.set_cookie(
            name,
            session.token,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )

    def _delete_cookie(self, app, response):
        response.delete_cookie(
            self.get_cookie_name(app),
            domain=self.get_cookie_domain(app),
            path=self.get_cookie_path(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
            httponly=self.get_cookie_httponly(app),
        )
