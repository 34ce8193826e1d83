from typing import Callable, Optional

from authgate.core.interfaces import NavigationCapability, SessionCapability
from authgate.core.redirect import RedirectResolver
from authgate.observability.logging import log


class SessionObserver:
    """
    Watches the session and leaves the login page once it is authenticated.

    - start() observes immediately (already-authenticated visitor) and then on
      every change notified by the session capability.
    - One redirect per stretch of authenticated observations; an
      unauthenticated observation re-arms it.
    """

    def __init__(
        self,
        session: SessionCapability,
        navigator: NavigationCapability,
        resolver: Optional[RedirectResolver] = None,
        on_redirect: Optional[Callable[[str], None]] = None,
    ):
        self.session = session
        self.navigator = navigator
        self.resolver = resolver or RedirectResolver()
        self.on_redirect = on_redirect
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._redirected = False

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.session.subscribe(self.observe)
        self.observe(self.session.is_authenticated)

    def stop(self) -> None:
        if self._unsubscribe is None:
            return
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        unsubscribe()

    def observe(self, authenticated: bool) -> Optional[str]:
        if not authenticated:
            self._redirected = False
            return None
        if self._redirected:
            return None

        # Intent is read at redirect time, never cached
        target = self.resolver.resolve(self.navigator.current_intent)
        self._redirected = True
        log(event="session_redirect", path=target)
        self.navigator.navigate(target, replace=True)
        if self.on_redirect is not None:
            self.on_redirect(target)
        return target
