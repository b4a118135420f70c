"""
Embedding Host Signal

When the interface runs inside a chat platform's web-app shell, the shell
expects one "ready" call at startup. Nothing else is exchanged with it.

The call is injected as a plain callable so the flows never depend on
any particular host.
"""

from typing import Callable, Optional

from fintrack.diagnostics import DiagnosticLogger


TELEGRAM_READY_SCRIPT = """
<script src="https://telegram.org/js/telegram-web-app.js"></script>
<script>
  (window.Telegram && window.Telegram.WebApp) && window.Telegram.WebApp.ready();
</script>
"""


class ReadySignal:
    """
    One-shot wrapper around the host's ready callback.

    fire() calls the callback the first time only. With no callback
    (not embedded) it does nothing.
    """

    def __init__(
        self,
        notify: Optional[Callable[[], None]] = None,
        diagnostics: Optional[DiagnosticLogger] = None,
    ):
        self._notify = notify
        self._diagnostics = diagnostics or DiagnosticLogger()
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> bool:
        """Returns True if this call sent the signal."""
        if self._fired or self._notify is None:
            return False
        self._fired = True
        self._notify()
        self._diagnostics.log_host_ready()
        return True
