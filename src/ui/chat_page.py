"""NiceGUI chat interface rendering the streamed transcript."""

from nicegui import app, events, ui

from src.client.errors import ChatClientError
from src.client.orchestrator import ChatOrchestrator
from src.models.schemas import Message, Role
from src.transcript.store import TranscriptStore
from src.ui.profile import (
    ProfileImageError,
    load_profile_image,
    save_profile_image,
    to_data_uri,
)

ERROR_TOAST = "Something went wrong. Please try again."

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: linear-gradient(180deg, #f9fafb 0%, #f3f4f6 100%); min-height: 100vh; }

    .chat-card {
        background: white;
        border-radius: 12px;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.08);
        overflow: hidden;
    }

    .message-user {
        background: #111827;
        color: white;
        border-radius: 12px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 12px;
    }

    .avatar-user { background: linear-gradient(90deg, #6366f1 0%, #a855f7 100%); }
    .avatar-assistant { background: #e5e7eb; }

    .typing-dot {
        width: 8px; height: 8px;
        background: currentColor;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.075s; }
    .typing-dot:nth-child(3) { animation-delay: 0.15s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    store = TranscriptStore()
    profile = {"image": load_profile_image(app.storage.user)}

    messages_container: ui.column
    typing_row: ui.row
    input_field: ui.input
    send_btn: ui.button
    # label of the last rendered bubble, updated in place while streaming
    rendered = {"count": 0, "last_label": None}

    def render_avatar(is_user: bool) -> None:
        if is_user and profile["image"]:
            ui.image(profile["image"]).classes("w-8 h-8 rounded-full ring-2 ring-white shadow-sm")
            return
        css = "avatar-user" if is_user else "avatar-assistant"
        with ui.element("div").classes(f"w-8 h-8 rounded-full flex items-center justify-center {css}"):
            ui.label("You" if is_user else "AI").classes(
                f"text-xs font-semibold {'text-white' if is_user else 'text-gray-700'}"
            )

    def render_message(msg: Message) -> ui.label:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-start"):
            if not is_user:
                render_avatar(False)
            with ui.element("div").classes(f"px-4 py-2 max-w-[80%] {bubble}"):
                label = ui.label(msg.content).classes(
                    "text-sm leading-relaxed whitespace-pre-wrap break-words"
                )
            if is_user:
                render_avatar(True)
        return label

    def rebuild() -> None:
        messages_container.clear()
        rendered["last_label"] = None
        with messages_container:
            if not len(store):
                with ui.column().classes("w-full h-64 items-center justify-center gap-2"):
                    ui.label("Welcome to AI Chat").classes("text-lg font-medium")
                    ui.label(
                        "Start a conversation with the AI assistant. "
                        "Ask questions, get information, or just chat!"
                    ).classes("text-gray-500 text-center max-w-md")
            else:
                for msg in store.messages:
                    rendered["last_label"] = render_message(msg)
        rendered["count"] = len(store)

    def on_transcript_change(changed: TranscriptStore) -> None:
        # same message count: only the open message's text moved on
        if len(changed) == rendered["count"] and rendered["last_label"] is not None:
            rendered["last_label"].set_text(changed.last.content)
        else:
            rebuild()
        update_typing_indicator()

    def update_typing_indicator() -> None:
        last = store.last
        waiting = orchestrator.loading and (last is None or last.role is Role.USER)
        typing_row.set_visibility(waiting)

    def on_loading(loading: bool) -> None:
        if loading:
            send_btn.disable()
            input_field.disable()
        else:
            send_btn.enable()
            input_field.enable()
        update_typing_indicator()

    def on_error(error: ChatClientError) -> None:
        ui.notify(ERROR_TOAST, type="negative")

    orchestrator = ChatOrchestrator(store=store, on_loading=on_loading, on_error=on_error)
    store.subscribe(on_transcript_change)
    ui.context.client.on_disconnect(orchestrator.aclose)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or orchestrator.loading:
            return
        input_field.value = ""
        await orchestrator.submit(text)

    def new_chat() -> None:
        if orchestrator.loading:
            return
        store.clear()

    async def handle_avatar_upload(e: events.UploadEventArguments) -> None:
        try:
            data_uri = to_data_uri(await e.file.read(), e.file.content_type)
        except ProfileImageError as err:
            ui.notify(str(err), type="warning")
            return
        profile["image"] = data_uri
        save_profile_image(app.storage.user, data_uri)
        rebuild()

    def clear_avatar() -> None:
        profile["image"] = None
        save_profile_image(app.storage.user, None)
        rebuild()

    # === UI Layout ===
    with ui.dialog() as settings_dialog, ui.card().classes("w-96"):
        ui.label("Profile picture").classes("text-lg font-semibold")
        ui.upload(on_upload=handle_avatar_upload, auto_upload=True, max_files=1).props(
            "accept=image/*"
        ).classes("w-full")
        with ui.row().classes("w-full justify-end"):
            ui.button("Remove", on_click=clear_avatar).props("flat color=negative")
            ui.button("Close", on_click=settings_dialog.close).props("flat")

    with (
        ui.element("div").classes("w-full min-h-screen p-4 flex justify-center"),
        ui.column().classes("w-full max-w-3xl chat-card").style("height: 90vh"),
    ):
        with ui.row().classes("w-full px-5 py-4 items-center justify-between border-b"):
            ui.label("AI Assistant").classes("text-xl font-semibold")
            with ui.row().classes("items-center gap-1"):
                ui.button(icon="add", on_click=new_chat).props("flat round")
                ui.button(icon="settings", on_click=settings_dialog.open).props("flat round")

        with (
            ui.scroll_area().classes("flex-grow w-full") as scroll,
            ui.column().classes("w-full p-4 gap-4"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            with ui.row().classes("w-full justify-start gap-3 items-start") as typing_row:
                render_avatar(False)
                with ui.element("div").classes("message-assistant px-4 py-3"):
                    with ui.row().classes("gap-1 text-gray-500"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
            typing_row.set_visibility(False)
            rebuild()

        with ui.row().classes("w-full p-4 gap-2 items-center border-t"):
            input_field = (
                ui.input(placeholder="Type your message...")
                .props("outlined dense autocomplete=off")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            send_btn = ui.button("Send", icon="send", on_click=send_message).props("unelevated")

    store.subscribe(lambda _: scroll.scroll_to(percent=1.0))
