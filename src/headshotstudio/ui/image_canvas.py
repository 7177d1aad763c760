from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from PIL import Image, ImageTk

from headshotstudio.core.imaging import payload_to_pil
from headshotstudio.core.models import ImagePayload


class PayloadCanvas(ttk.Frame):
    """Shows an ImagePayload scaled to fit, or a placeholder message when empty."""

    def __init__(self, master, *, placeholder: str = "No image", bg: str = "#f3f3f3"):
        super().__init__(master)
        self._canvas = tk.Canvas(self, highlightthickness=0, bg=bg)
        self._canvas.pack(fill="both", expand=True)

        self._payload: Optional[ImagePayload] = None
        self._decoded: Optional[Image.Image] = None
        self._photo: Optional[ImageTk.PhotoImage] = None

        self._canvas.bind("<Configure>", lambda _evt: self._redraw())

        self._placeholder_id = self._canvas.create_text(
            0, 0, anchor="center",
            text=placeholder,
            fill="#666",
            font=("TkDefaultFont", 11),
        )

    def set_placeholder(self, text: str) -> None:
        self._canvas.itemconfigure(self._placeholder_id, text=text)

    def set_payload(self, payload: Optional[ImagePayload]) -> None:
        if payload is self._payload:
            return
        self._payload = payload
        self._decoded = payload_to_pil(payload) if payload is not None else None
        self._redraw()

    def clear(self) -> None:
        self.set_payload(None)

    @staticmethod
    def _fit_size(img_w: int, img_h: int, box_w: int, box_h: int) -> Tuple[int, int]:
        if img_w <= 0 or img_h <= 0 or box_w <= 2 or box_h <= 2:
            return (1, 1)
        scale = min(box_w / img_w, box_h / img_h)
        return max(1, int(img_w * scale)), max(1, int(img_h * scale))

    def _redraw(self) -> None:
        self._canvas.delete("img")
        w = max(1, self._canvas.winfo_width())
        h = max(1, self._canvas.winfo_height())

        if self._decoded is None:
            self._canvas.coords(self._placeholder_id, w // 2, h // 2)
            self._canvas.itemconfigure(self._placeholder_id, state="normal")
            return

        self._canvas.itemconfigure(self._placeholder_id, state="hidden")
        new_w, new_h = self._fit_size(self._decoded.width, self._decoded.height, w, h)
        resized = self._decoded.resize((new_w, new_h), Image.LANCZOS)

        self._photo = ImageTk.PhotoImage(resized)
        self._canvas.create_image((w - new_w) // 2, (h - new_h) // 2, anchor="nw", image=self._photo, tags=("img",))
