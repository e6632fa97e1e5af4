"""Rendering of controller state as Rich renderables."""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from ..core.controller import Controller, Phase

PROGRESS_WIDTH = 30

TITLE_STYLE = "bold color(62)"
FILE_STYLE = "italic color(156)"
OPTION_STYLE = "bold color(214)"
DIVIDER_STYLE = "color(240)"
PROCESSING_STYLE = "bold color(226)"
SUCCESS_STYLE = "bold color(46)"
ERROR_STYLE = "bold color(196)"

OPTIONS = (("K", "eep"), ("D", "elete"), ("S", "kip"), ("Q", "uit"))


def progress_bar(done: int, position: int, total: int, width: int = PROGRESS_WIDTH) -> Text:
    """
    Build a bar filled in proportion to the handled files.

    The label shows the 1-based position of the file on screen, so the first
    file reads "1/5" with an empty bar.
    """
    bar = Text()
    if total <= 0:
        return bar

    fraction = min(done, total) / total
    filled = int(fraction * width)

    bar.append("█" * filled, style="color(46)")
    bar.append("░" * (width - filled), style="color(240)")
    bar.append(f" File {position}/{total} ({fraction * 100:.1f}%)", style="color(252)")
    return bar


def _current_file(controller: Controller) -> Text:
    return Text(f"📄 {controller.batch.current()}", style=FILE_STYLE)


def _progress(controller: Controller) -> Text:
    batch = controller.batch
    return progress_bar(batch.done(), batch.progress(), batch.total())


def _options() -> Text:
    line = Text("❓ Action: ")
    for i, (key, rest) in enumerate(OPTIONS):
        if i:
            line.append(" ┃ ", style=DIVIDER_STYLE)
        line.append(key, style=OPTION_STYLE)
        line.append(rest)
    return line


def file_manage_view(controller: Controller) -> RenderableType:
    return Group(
        Text("📁 File Manager", style=TITLE_STYLE),
        Text(),
        _progress(controller),
        Text(),
        _current_file(controller),
        Text(),
        _options(),
    )


def processing_view(controller: Controller) -> RenderableType:
    return Group(
        Text("⚙️  Processing Files", style=TITLE_STYLE),
        Text(),
        _progress(controller),
        Text(),
        _current_file(controller),
        Text(),
        Text("⏳ Processing...", style=PROCESSING_STYLE),
    )


def end_view(controller: Controller) -> RenderableType:
    return Group(
        Text("🎉 Processing Complete!", style=SUCCESS_STYLE),
        Text(),
        Text(f"✅ Processed {controller.batch.total()} files", style="bold color(39)"),
        Text(),
        Text("👆 Press any key to exit"),
    )


def error_view(controller: Controller) -> RenderableType:
    return Group(
        Text("❌ Error Occurred", style=ERROR_STYLE),
        Text(),
        Panel(
            Text(controller.error_message or "", style="color(203)"),
            border_style="color(196)",
            expand=False,
        ),
        Text(),
        Text("👆 Press any key to exit"),
    )


_VIEWS = {
    Phase.FILE_MANAGE: file_manage_view,
    Phase.PROCESSING: processing_view,
    Phase.END: end_view,
    Phase.ERROR: error_view,
}


def render(controller: Controller) -> RenderableType:
    """Return the frame for the controller's current phase."""
    return Group(Text(), _VIEWS[controller.phase](controller))
