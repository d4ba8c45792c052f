"""UI shell collaborators: window opening and the blocking confirm dialog.

The dialog is built with tkinter on whichever thread calls `confirm`; the bridge
calls it from a worker thread. That works on Linux and Windows. Tk on macOS only
runs on the main thread, so there `confirm` off the main thread fails with
`ShellError` instead of aborting the process.
"""
from __future__ import annotations

import logging
import sys
import threading
import webbrowser
from typing import Optional, Protocol

from .errors import ShellError

logger = logging.getLogger(__name__)

OK_VALUE = "OK Value"
REMEMBERED_VALUE = "Remembered Value"
DIALOG_TITLE = "تحذير"

# 按钮顺序与返回的 response 下标一致
BUTTONS = ("Cancel", "OK")


class Shell(Protocol):
    def open_window(self, hash: str) -> None: ...

    def confirm(self, message: str) -> Optional[str]: ...


def prompt_response(response: int, checkbox_checked: bool) -> Optional[str]:
    if response != 1:
        return None
    return REMEMBERED_VALUE if checkbox_checked else OK_VALUE


def dialog_allowed_here(platform: str | None = None) -> bool:
    platform = platform or sys.platform
    return platform != "darwin" or threading.current_thread() is threading.main_thread()


def window_url(ui_url: str, hash: str = "") -> str:
    hash = (hash or "").lstrip("#")
    return f"{ui_url}#{hash}" if hash else ui_url


class DesktopShell:
    def __init__(self, ui_url: str, remember_label: Optional[str] = None):
        self.ui_url = ui_url
        self.remember_label = remember_label
        self._dialog_lock = threading.Lock()

    def open_main_window(self):
        self.open_window("")

    def open_window(self, hash: str) -> None:
        url = window_url(self.ui_url, hash)
        logger.info("Opening window %s", url)
        try:
            opened = webbrowser.open(url, new=1)
        except webbrowser.Error as e:
            raise ShellError(f"cannot open {url}: {e}", "open_window") from e
        if not opened:
            raise ShellError(f"no browser available to open {url}", "open_window")

    def confirm(self, message: str) -> Optional[str]:
        if not dialog_allowed_here():
            raise ShellError("confirm dialog needs the main thread on macOS", "confirm")
        try:
            import tkinter
        except ImportError as e:
            raise ShellError(f"tkinter unavailable: {e}", "confirm") from e
        # 同一时间只弹一个对话框
        with self._dialog_lock:
            try:
                response, checked = self._show_dialog(message)
            except tkinter.TclError as e:
                raise ShellError(f"cannot show dialog: {e}", "confirm") from e
        return prompt_response(response, checked)

    def _show_dialog(self, message: str) -> tuple[int, bool]:
        import tkinter as tk

        root = tk.Tk()
        root.title(DIALOG_TITLE)
        root.resizable(False, False)
        root.attributes("-topmost", True)
        result = {"response": 0, "checked": False}
        remember = tk.BooleanVar(master=root, value=False)

        tk.Label(root, text=message, font=("Helvetica", 14), wraplength=360, padx=20, pady=16).pack(side=tk.TOP)
        if self.remember_label:
            tk.Checkbutton(root, text=self.remember_label, variable=remember).pack(side=tk.TOP, pady=4)

        frame = tk.Frame(root, pady=10)
        frame.pack(side=tk.BOTTOM)

        def choose(index: int):
            result["response"] = index
            result["checked"] = bool(remember.get())
            root.destroy()

        for index, label in enumerate(BUTTONS):
            button = tk.Button(frame, text=label, width=10, command=lambda i=index: choose(i))
            button.pack(side=tk.LEFT, padx=8)
            if index == 1:
                button.focus_set()
        root.bind("<Return>", lambda _e: choose(1))
        root.bind("<Escape>", lambda _e: choose(0))
        root.protocol("WM_DELETE_WINDOW", lambda: choose(0))
        root.mainloop()
        return result["response"], result["checked"]
