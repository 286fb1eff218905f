# src/globalpost_client/core/session_manager.py
"""
Thread-local requests.Session для RequestsTransport.

Один транспорт (и один GlobalPostClient) можно делить между потоками:
каждый поток получает свою сессию со своим пулом соединений.
"""
import threading
import weakref
from typing import Callable

import requests


class ThreadSafeSessionManager:
    """
    Сессия на поток, ленивое создание, закрытие всех сессий из любого потока.

    Example:
        >>> manager = ThreadSafeSessionManager(requests.Session)
        >>> session = manager.get_session()
        >>> manager.close_all()
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        """
        Args:
            session_factory: Создаёт и настраивает новую Session
        """
        self._session_factory = session_factory
        self._lock = threading.Lock()
        self._local = threading.local()
        # Сессии умерших потоков исчезают сами
        self._sessions: "weakref.WeakSet[requests.Session]" = weakref.WeakSet()

    def get_session(self) -> requests.Session:
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._lock:
                self._sessions.add(session)
        return session

    def close_all(self) -> None:
        """
        Закрыть сессии всех потоков.

        Следующий get_session() в любом потоке создаст новую сессию.
        """
        with self._lock:
            sessions = list(self._sessions)
            self._sessions.clear()
            self._local = threading.local()

        for session in sessions:
            session.close()

    def get_active_sessions_count(self) -> int:
        with self._lock:
            return len(self._sessions)
