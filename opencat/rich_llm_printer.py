"""
Rich printers for displaying OpenCat chat responses and delta streams.
"""
from typing import Dict, Any, AsyncIterator, Optional
from rich.console import Console
from rich.markdown import Markdown
from rich.syntax import Syntax
from rich.panel import Panel
from rich.live import Live
from rich.console import Group
from rich.text import Text
import json

from .types import ChatResponse, StreamEvent

default_console = Console()


def _metadata_panel(meta: Dict[str, Any]) -> Panel:
    metadata_display = Syntax(
        json.dumps(meta, indent=2, default=str),
        "json",
        theme="lightbulb",
        background_color="default"
    )
    return Panel(
        metadata_display,
        title="[bold]Metadata[/bold]",
        border_style="dim"
    )


class RichStreamPrinter:
    """
    Display events from ``OpenCatClient.astream`` live with rich.

    Attributes:
        title: Title for the display panel
        show_metadata: Whether to show model / finish reason at the end
        code_theme: Theme for code blocks
        inline_code_theme: Theme for inline code
        refresh_rate: Refresh rate for Live display
        show_final_title: Whether to change title to "Final Response" at the end
        border_style: Border style while streaming
    """

    def __init__(
        self,
        title: str = "Streaming Response",
        show_metadata: bool = True,
        code_theme: str = "coffee",
        inline_code_theme: str = "monokai",
        refresh_rate: int = 30,
        show_final_title: bool = True,
        border_style: str = "blue",
        console: Optional[Console] = None,
    ):
        self.title = title
        self.show_metadata = show_metadata
        self.code_theme = code_theme
        self.inline_code_theme = inline_code_theme
        self.refresh_rate = refresh_rate
        self.show_final_title = show_final_title
        self.border_style = border_style
        self.console = console if console is not None else default_console
        self._full_text = ""
        self._meta: Dict[str, Any] = {}
        self._final_event: Optional[Dict[str, Any]] = None

    async def print_stream(
        self,
        event_stream: AsyncIterator[StreamEvent]
    ) -> Dict[str, Any]:
        """
        Process and display streaming events with rich formatting.

        Args:
            event_stream: Async iterator of stream events

        Returns:
            The terminal event with the assembled text under ``full_text``,
            or an empty dict if the stream produced no terminal event.
        """
        self._full_text = ""
        self._meta = {}
        self._final_event = None
        panel = Panel("", border_style=self.border_style)

        with Live(panel, refresh_per_second=self.refresh_rate, console=self.console) as live:
            async for event in event_stream:
                self._process_event(event, live)

        return self._final_event or {}

    def _process_event(self, event: StreamEvent, live: Live) -> None:
        """Process a single event and update the display."""
        if event["type"] == "token":
            self._full_text += event["text"]
            for key in ("model", "finish_reason"):
                if event.get(key):
                    self._meta[key] = event[key]
            self._update_display(live, is_final=False)
        elif event["type"] == "done":
            self._final_event = dict(event)
            self._final_event["full_text"] = self._full_text
            if self._meta:
                self._final_event["meta"] = dict(self._meta)
            self._update_display(live, is_final=True)

    def _update_display(self, live: Live, is_final: bool = False) -> None:
        """Update the Live display with current content."""
        if is_final and self.show_final_title:
            title = "[bold]Final Response[/bold]"
        else:
            title = f"[bold]{self.title}[/bold]"

        live.update(
            Panel(
                self._build_content(is_final),
                title=title,
                border_style="green" if is_final else self.border_style,
                padding=(1, 2)
            )
        )

    def _build_content(self, is_final: bool) -> Any:
        if not self._full_text.strip():
            return Text("(waiting for response...)", style="dim italic")

        markdown = Markdown(
            self._full_text,
            code_theme=self.code_theme,
            inline_code_theme=self.inline_code_theme
        )
        if is_final and self.show_metadata and self._meta:
            return Group(markdown, _metadata_panel(self._meta))
        return markdown

    def get_full_text(self) -> str:
        """Get the full assembled text."""
        return self._full_text

    def get_final_event(self) -> Optional[Dict[str, Any]]:
        """Get the final event if available."""
        return self._final_event


class RichPrinter:
    """
    Display a non-streaming ``ChatResponse`` with rich.

    Attributes:
        title: Title for the display panel
        show_metadata: Whether to show id / model / finish reason / usage
        code_theme: Theme for code blocks
        inline_code_theme: Theme for inline code
        border_style: Border style for the panel
    """

    def __init__(
        self,
        title: str = "Response",
        show_metadata: bool = True,
        code_theme: str = "coffee",
        inline_code_theme: str = "monokai",
        border_style: str = "green",
        console: Optional[Console] = None,
    ):
        self.title = title
        self.show_metadata = show_metadata
        self.code_theme = code_theme
        self.inline_code_theme = inline_code_theme
        self.border_style = border_style
        self.console = console if console is not None else default_console
        self._response: Optional[ChatResponse] = None

    def print_chat(self, response: ChatResponse) -> ChatResponse:
        """
        Display the first choice of a chat response.

        Returns:
            The same response for chaining
        """
        self._response = response
        title = f"[bold]{self.title}[/bold]"
        if response.get("model"):
            title += f" [dim]({response['model']})[/dim]"

        self.console.print(
            Panel(
                self._build_content(response),
                title=title,
                border_style=self.border_style,
                padding=(1, 2)
            )
        )
        return response

    def _build_content(self, response: ChatResponse) -> Any:
        text = self.get_text()
        if not text.strip():
            return Text("(empty response)", style="dim italic")

        markdown = Markdown(
            text,
            code_theme=self.code_theme,
            inline_code_theme=self.inline_code_theme
        )
        if not self.show_metadata:
            return markdown

        choices = response.get("choices") or []
        meta = {
            "id": response.get("id"),
            "model": response.get("model"),
            "finish_reason": choices[0]["finish_reason"] if choices else None,
            "usage": response.get("usage"),
        }
        meta = {k: v for k, v in meta.items() if v}
        if meta:
            return Group(markdown, _metadata_panel(meta))
        return markdown

    def get_response(self) -> Optional[ChatResponse]:
        """Get the last printed response."""
        return self._response

    def get_text(self) -> str:
        """Get the first choice's text from the last printed response."""
        if not self._response:
            return ""
        choices = self._response.get("choices") or []
        if not choices:
            return ""
        return choices[0]["message"]["content"]
