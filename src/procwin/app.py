"""procwin - Textual front-end for the process window controller."""

from datetime import datetime

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Checkbox, Footer, Input, Label, Log, Select

from procwin.controller import ProcessController
from procwin.errors import InvalidCommandError
from procwin.models import ProcessRecord, WindowCommand


def format_log_line(message: str, now: datetime | None = None) -> str:
    """Prefix a status message with a timestamp."""
    now = now or datetime.now()
    return f"[{now:%Y-%m-%d %H:%M:%S}]: {message}"


class TargetOptions(Container):
    """Editable attributes and commands for the resolved target window."""

    DEFAULT_CSS = """
    TargetOptions {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    TargetOptions Horizontal {
        height: auto;
    }

    TargetOptions Label {
        width: 10;
        padding-top: 1;
    }

    TargetOptions Input {
        width: 1fr;
    }

    TargetOptions Select {
        width: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the option fields."""
        yield Horizontal(Label("Title"), Input(id="title"))
        yield Checkbox("TopMost", id="topmost")
        yield Horizontal(
            Label("Width"),
            Input(type="integer", id="width"),
            Label("Height"),
            Input(type="integer", id="height"),
        )
        yield Horizontal(Label("Opacity"), Input(type="integer", id="opacity"))
        yield Horizontal(
            Select(
                [(command.value, command) for command in WindowCommand],
                prompt="Select a Command...",
                id="command",
            ),
            Button("Execute", id="execute"),
        )

    def show_record(self, record: ProcessRecord) -> None:
        """
        Fill the fields from a record and show or hide the panel.

        The TopMost checkbox is updated without posting Changed so that
        displaying a record never sends a command back to the window.
        """
        self.display = record.is_resolved
        self.border_title = record.display_name if record.is_resolved else ""

        self.query_one("#title", Input).value = record.window_title
        self.query_one("#width", Input).value = str(record.width)
        self.query_one("#height", Input).value = str(record.height)
        self.query_one("#opacity", Input).value = str(record.opacity)

        topmost = self.query_one("#topmost", Checkbox)
        with topmost.prevent(Checkbox.Changed):
            topmost.value = record.is_topmost


class ProcwinApp(App):
    """Main procwin application."""

    TITLE = "procwin"
    SUB_TITLE = "Process Window Control"

    CSS = """
    Screen {
        layout: vertical;
    }

    #lookup {
        height: auto;
    }

    #target {
        width: 1fr;
    }

    #log {
        height: 1fr;
        border: solid $secondary;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, controller: ProcessController | None = None) -> None:
        """Initialize the ProcwinApp."""
        super().__init__()
        self._controller = controller or ProcessController()

    @property
    def record(self) -> ProcessRecord:
        return self._controller.get_process_info()

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Horizontal(
            Input(placeholder="Process name or ID", id="target"),
            Button("Get Process", id="get", variant="primary"),
            id="lookup",
        )
        yield TargetOptions(id="options")
        yield Log(id="log")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(TargetOptions).display = False

    def write_log(self, message: str) -> None:
        """Append a timestamped status line to the log panel."""
        self.query_one("#log", Log).write_line(format_log_line(message))

    def fetch_process(self, name_or_id: str) -> ProcessRecord:
        """Look up a process, then refresh the option panel from the new record."""
        record = self._controller.get_process_details(name_or_id, self.write_log)
        self.query_one(TargetOptions).show_record(record)
        if record.process_name:
            self.query_one("#target", Input).value = record.process_name
        return record

    def run_command(self, command: object) -> None:
        """Execute a command given as a WindowCommand or its label; anything else is rejected."""
        if isinstance(command, str):
            try:
                command = WindowCommand.parse(command)
            except InvalidCommandError:
                self.write_log("Invalid command!")
                return
        if not isinstance(command, WindowCommand):
            self.write_log("Invalid command!")
            return
        self._controller.execute(command, self.write_log, self.record.process_id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "get":
            self.fetch_process(self.query_one("#target", Input).value)
        elif event.button.id == "execute":
            self.run_command(self.query_one("#command", Select).value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Apply the field that was submitted with Enter."""
        process_id = self.record.process_id
        match event.input.id:
            case "target":
                self.fetch_process(event.value)
            case "title":
                self._controller.set_window_title(event.value, process_id, self.write_log)
            case "width" | "height":
                width = self._read_int("#width")
                height = self._read_int("#height")
                if width is not None and height is not None:
                    self._controller.set_window_size(width, height, self.write_log, process_id)
            case "opacity":
                value = self._read_int("#opacity")
                if value is not None:
                    self._controller.set_window_opacity(value, self.write_log, process_id)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "topmost":
            self._controller.set_window_topmost(event.value, self.record.process_id, self.write_log)

    def _read_int(self, selector: str) -> int | None:
        text = self.query_one(selector, Input).value
        try:
            return int(text)
        except ValueError:
            self.write_log(f"Invalid number: {text!r}")
            return None


def main() -> None:
    """Entry point for procwin application."""
    app = ProcwinApp()
    app.run()


if __name__ == "__main__":
    main()
