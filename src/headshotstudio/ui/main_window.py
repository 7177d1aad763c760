from __future__ import annotations

import asyncio
import logging
import threading
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Optional

from headshotstudio.app.config import Settings, configure_logging
from headshotstudio.app.controller import HeadshotController
from headshotstudio.app.state import Screen
from headshotstudio.core.imaging import load_payload, save_payload
from headshotstudio.core.models import BackgroundStyle, SuitStyle
from headshotstudio.core.styles import BACKGROUND_LABELS, SUIT_LABELS
from headshotstudio.services.transform_client import ImageTransformClient
from headshotstudio.ui.image_canvas import PayloadCanvas

logger = logging.getLogger(__name__)


class HeadshotStudioApp(ttk.Frame):
    """Headshot Studio window: upload screen, preview/configure screen, loading overlay."""

    def __init__(self, master: tk.Tk, controller: HeadshotController, settings: Settings):
        super().__init__(master)
        self.master = master
        self.controller = controller
        self.settings = settings

        self._suit_by_label = {label: key for key, label in SUIT_LABELS.items()}
        self._bg_by_label = {label: key for key, label in BACKGROUND_LABELS.items()}

        self._build_style()
        self._build_layout()
        self._bind_shortcuts()

        self.render()

    # ---------- UI construction ----------

    def _build_style(self) -> None:
        style = ttk.Style(self.master)
        if "clam" in style.theme_names():
            style.theme_use("clam")
        style.configure("Title.TLabel", font=("TkDefaultFont", 16, "bold"))
        style.configure("Subtle.TLabel", foreground="#666")
        style.configure("Error.TLabel", foreground="#b00020")

    def _build_layout(self) -> None:
        self.pack(fill="both", expand=True)

        # Header
        header = ttk.Frame(self, padding=(16, 12))
        header.pack(side="top", fill="x")
        ttk.Label(header, text="Headshot Studio", style="Title.TLabel").pack(side="left")
        ttk.Label(
            header, text="Turn a casual photo into a professional headshot", style="Subtle.TLabel"
        ).pack(side="left", padx=(12, 0))
        ttk.Separator(self, orient="horizontal").pack(side="top", fill="x")

        # Footer
        footer = ttk.Frame(self, padding=(16, 6))
        footer.pack(side="bottom", fill="x")
        ttk.Label(
            footer,
            text="Photos are sent to Google Gemini for processing and are not stored by this app.",
            style="Subtle.TLabel",
        ).pack(side="left")

        self.body = ttk.Frame(self, padding=(16, 12))
        self.body.pack(side="top", fill="both", expand=True)

        self._build_upload_screen()
        self._build_preview_screen()
        self._build_overlay()

    def _build_upload_screen(self) -> None:
        self.upload_screen = ttk.Frame(self.body)
        inner = ttk.Frame(self.upload_screen)
        inner.place(relx=0.5, rely=0.45, anchor="center")

        ttk.Label(inner, text="Upload a photo of yourself", style="Title.TLabel").pack(pady=(0, 6))
        ttk.Label(
            inner,
            text="A clear, front-facing photo with your face fully visible works best.",
            style="Subtle.TLabel",
        ).pack(pady=(0, 14))
        self.btn_upload = ttk.Button(inner, text="Choose photo…", command=self.on_upload)
        self.btn_upload.pack()

    def _build_preview_screen(self) -> None:
        self.preview_screen = ttk.Frame(self.body)

        images = ttk.PanedWindow(self.preview_screen, orient="horizontal")
        images.pack(side="top", fill="both", expand=True)

        lf_orig = ttk.LabelFrame(images, text="Original", padding=8)
        self.original_canvas = PayloadCanvas(lf_orig, placeholder="No photo")
        self.original_canvas.pack(fill="both", expand=True)
        images.add(lf_orig, weight=1)

        lf_result = ttk.LabelFrame(images, text="Headshot", padding=8)
        self.result_canvas = PayloadCanvas(lf_result, placeholder="Pick your styles and press Create headshot")
        self.result_canvas.pack(fill="both", expand=True)
        images.add(lf_result, weight=1)

        settings = ttk.LabelFrame(self.preview_screen, text="Style", padding=8)
        settings.pack(side="top", fill="x", pady=(10, 0))
        settings.columnconfigure(1, weight=1)
        settings.columnconfigure(3, weight=1)

        ttk.Label(settings, text="Suit:").grid(row=0, column=0, sticky="w", padx=(0, 6))
        self.var_suit = tk.StringVar()
        self.combo_suit = ttk.Combobox(
            settings, textvariable=self.var_suit, values=list(SUIT_LABELS.values()), state="readonly"
        )
        self.combo_suit.grid(row=0, column=1, sticky="ew")
        self.combo_suit.bind("<<ComboboxSelected>>", self.on_suit_selected)

        ttk.Label(settings, text="Background:").grid(row=0, column=2, sticky="w", padx=(16, 6))
        self.var_bg = tk.StringVar()
        self.combo_bg = ttk.Combobox(
            settings, textvariable=self.var_bg, values=list(BACKGROUND_LABELS.values()), state="readonly"
        )
        self.combo_bg.grid(row=0, column=3, sticky="ew")
        self.combo_bg.bind("<<ComboboxSelected>>", self.on_background_selected)

        self.error_var = tk.StringVar(value="")
        self.error_label = ttk.Label(self.preview_screen, textvariable=self.error_var, style="Error.TLabel")
        self.error_label.pack(side="top", anchor="w", pady=(8, 0))

        actions = ttk.Frame(self.preview_screen)
        actions.pack(side="top", fill="x", pady=(8, 0))
        self.btn_transform = ttk.Button(actions, text="Create headshot", command=self.on_transform)
        self.btn_save = ttk.Button(actions, text="Save headshot…", command=self.on_save)
        self.btn_reset = ttk.Button(actions, text="Start over", command=self.on_reset)
        self.btn_transform.pack(side="left")
        self.btn_save.pack(side="left", padx=(6, 0))
        self.btn_reset.pack(side="right")

    def _build_overlay(self) -> None:
        self.overlay = ttk.Frame(self, padding=24, relief="raised")
        ttk.Label(self.overlay, text="Creating your headshot…", style="Title.TLabel").pack(pady=(0, 8))
        ttk.Label(self.overlay, text="This usually takes a few seconds.", style="Subtle.TLabel").pack(pady=(0, 12))
        self.progress = ttk.Progressbar(self.overlay, mode="indeterminate", length=220)
        self.progress.pack()

    def _bind_shortcuts(self) -> None:
        self.master.bind_all("<Control-o>", lambda e: self.on_upload())
        self.master.bind_all("<Command-o>", lambda e: self.on_upload())

        self.master.bind_all("<Control-Return>", lambda e: self.on_transform())
        self.master.bind_all("<Command-Return>", lambda e: self.on_transform())

        self.master.bind_all("<Control-s>", lambda e: self.on_save())
        self.master.bind_all("<Command-s>", lambda e: self.on_save())

    # ---------- Rendering ----------

    def _show_overlay(self, visible: bool) -> None:
        if visible:
            self.overlay.place(relx=0.5, rely=0.5, anchor="center")
            self.overlay.lift()
            self.progress.start(12)
        else:
            self.progress.stop()
            self.overlay.place_forget()

    def render(self) -> None:
        state = self.controller.state
        screen = self.controller.screen

        if screen is Screen.EMPTY:
            self.preview_screen.pack_forget()
            self.upload_screen.pack(fill="both", expand=True)
            self.original_canvas.clear()
            self.result_canvas.clear()
        else:
            self.upload_screen.pack_forget()
            self.preview_screen.pack(fill="both", expand=True)
            self.original_canvas.set_payload(state.original_image)
            self.result_canvas.set_payload(state.result_image)

        self.var_suit.set(SUIT_LABELS[state.suit_style])
        self.var_bg.set(BACKGROUND_LABELS[state.background_style])
        self.error_var.set(state.error_message or "")

        self._set_controls(processing=screen is Screen.PROCESSING)
        self._show_overlay(screen is Screen.PROCESSING)

    def _set_controls(self, processing: bool) -> None:
        if processing:
            for w in (self.btn_upload, self.btn_transform, self.btn_save, self.btn_reset):
                w.state(["disabled"])
            self.combo_suit.state(["disabled"])
            self.combo_bg.state(["disabled"])
            return

        state = self.controller.state
        self.btn_upload.state(["!disabled"])
        self.btn_reset.state(["!disabled"])
        self.combo_suit.state(["!disabled", "readonly"])
        self.combo_bg.state(["!disabled", "readonly"])
        self.btn_transform.state(["!disabled"] if state.original_image is not None else ["disabled"])
        self.btn_save.state(["!disabled"] if state.result_image is not None else ["disabled"])

    # ---------- Intents ----------

    def on_upload(self) -> None:
        if self.controller.screen is not Screen.EMPTY:
            return

        path = filedialog.askopenfilename(
            title="Select a photo",
            filetypes=[
                ("Image files", "*.jpg *.jpeg *.png *.bmp *.tif *.tiff *.webp"),
                ("All files", "*.*"),
            ],
        )
        if not path:
            return

        try:
            payload = load_payload(path, max_edge=self.settings.max_edge)
        except Exception as e:
            logger.warning("Could not open %s: %s", path, e)
            messagebox.showerror("Upload failed", f"Could not open image.\n\n{e}")
            return

        self.controller.upload(payload)
        self.render()

    def on_suit_selected(self, _evt=None) -> None:
        self.controller.set_suit_style(self._suit_by_label[self.var_suit.get()])

    def on_background_selected(self, _evt=None) -> None:
        self.controller.set_background_style(self._bg_by_label[self.var_bg.get()])

    def on_transform(self) -> None:
        # Claimed on the UI thread so a repeated shortcut press cannot start a second request.
        if not self.controller.begin_transform():
            return
        self.render()

        def worker() -> None:
            try:
                asyncio.run(self.controller.complete_transform())
            finally:
                self.master.after(0, self.render)

        threading.Thread(target=worker, daemon=True).start()

    def on_save(self) -> None:
        result = self.controller.state.result_image
        if result is None or self.controller.screen is Screen.PROCESSING:
            return

        default_ext = ".jpg" if result.mime_type == "image/jpeg" else ".png"
        path = filedialog.asksaveasfilename(
            title="Save headshot",
            defaultextension=default_ext,
            initialfile=f"headshot{default_ext}",
            filetypes=[("PNG image", "*.png"), ("JPEG image", "*.jpg *.jpeg")],
        )
        if not path:
            return

        try:
            save_payload(result, path)
        except (OSError, ValueError) as e:
            logger.warning("Could not save %s: %s", path, e)
            messagebox.showerror("Save failed", f"Could not save the headshot.\n\n{e}")

    def on_reset(self) -> None:
        if self.controller.reset():
            self.render()


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    if not settings.api_key:
        logger.warning("No Gemini API key configured; transforms will fail until GEMINI_API_KEY is set")

    client = ImageTransformClient(api_key=settings.api_key, model=settings.model)
    controller = HeadshotController(client)

    root = tk.Tk()
    root.title("Headshot Studio")
    root.geometry("1000x720")
    root.minsize(820, 600)

    HeadshotStudioApp(root, controller, settings)

    root.mainloop()
