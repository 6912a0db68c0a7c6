from __future__ import annotations

from PySide6.QtWidgets import QApplication

from perchnotes.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from perchnotes.ui.main_window import EditorWindow


def main() -> int:
    setup_logging()
    install_global_exception_hooks()
    app = QApplication([])
    win = EditorWindow()
    win.resize(520, 640)
    win.show()
    log.info("Application started, SID=%s", SESSION_ID)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
