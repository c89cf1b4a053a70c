"""Gradio chat page for the babbler."""
from __future__ import annotations

import os

import gradio as gr

from ..application.commands import CommandInterpreter
from ..application.replies import BufferedReplySink
from ..config import BabblerConfig
from .common import APP_TITLE, USAGE_NOTE, help_transcript, submit_chat_line

UI_PRIMARY_HUE = os.getenv("UI_PRIMARY_HUE", "green").strip() or "green"
APP_THEME = gr.themes.Base(primary_hue=UI_PRIMARY_HUE)


def create_gradio_app(
    *,
    config: BabblerConfig,
    logger,
    interpreter: CommandInterpreter,
    reply_sink: BufferedReplySink,
) -> gr.Blocks:
    def on_send(user, channel, message, transcript):
        try:
            updated = submit_chat_line(
                interpreter,
                reply_sink,
                user=user,
                channel=channel,
                message=message,
                transcript=transcript,
            )
        except Exception:
            logger.exception("Chat line failed")
            raise gr.Error("The babbler failed to handle that line; see the log.")
        return updated, ""

    def on_help(channel, transcript):
        return help_transcript(
            interpreter,
            reply_sink,
            channel=channel,
            transcript=transcript,
        )

    def on_clear():
        return ""

    with gr.Blocks(theme=APP_THEME, title=APP_TITLE) as app:
        gr.Markdown(f"# {APP_TITLE}")
        with gr.Row():
            with gr.Column(scale=3):
                transcript = gr.Textbox(
                    label="Conversation",
                    lines=18,
                    max_lines=18,
                    interactive=False,
                )
                message = gr.Textbox(
                    label="Message",
                    placeholder="say something, or try: <name> says",
                )
                with gr.Row():
                    send_btn = gr.Button("Send", variant="primary")
                    help_btn = gr.Button("Help", variant="secondary")
                    clear_btn = gr.Button("Clear", variant="secondary")
            with gr.Column(scale=1):
                user = gr.Textbox(label="Speaking as", value=config.default_user)
                channel = gr.Textbox(label="Channel", value="general")
                gr.Markdown(USAGE_NOTE)

        send_inputs = [user, channel, message, transcript]
        send_btn.click(fn=on_send, inputs=send_inputs, outputs=[transcript, message])
        message.submit(fn=on_send, inputs=send_inputs, outputs=[transcript, message])
        help_btn.click(fn=on_help, inputs=[channel, transcript], outputs=[transcript])
        clear_btn.click(fn=on_clear, inputs=None, outputs=[transcript])

    logger.debug("Gradio chat page built: default_user=%s", config.default_user)
    return app
