"""Fuzzy branch finder built on Textual."""

from typing import Callable, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.fuzzy import Matcher
from textual.widgets import Input, OptionList
from textual.widgets.option_list import Option

from easy_checkout.branches import BranchRecord
from easy_checkout.git import SelectionCancelled

LABEL_TIME_FORMAT = "%d/%m/%y %H:%M"
TIME_COLUMN_WIDTH = len("31/12/99 23:59")


def format_label(record: BranchRecord) -> str:
    """Render a record as ``<marker> <last used> <name>``."""
    marker = "* " if record.is_current else "  "
    # Remote branches never show a time, even if the reflog names them
    if record.last_usage is not None and not record.is_remote:
        # Show the time on the user's clock, not the committer's offset
        when = record.last_usage.astimezone().strftime(LABEL_TIME_FORMAT)
    else:
        when = ""
    return f"{marker}{when:<{TIME_COLUMN_WIDTH}}    {record.name}"


class BranchFinder(App[Optional[int]]):
    """Incremental fuzzy search over a ranked list of labels.

    Exits with the index of the chosen label, or None when cancelled.
    """

    DEFAULT_CSS = """
    BranchFinder {
        background: $surface;
    }

    #query {
        dock: top;
        margin: 0 0 1 0;
    }

    #branches {
        height: 1fr;
        border: none;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
    ]

    def __init__(self, labels: Sequence[str]):
        super().__init__()
        self.labels = list(labels)

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Type to filter branches", id="query")
        yield OptionList(id="branches")

    def on_mount(self) -> None:
        self._refresh_options("")
        self.query_one(Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_options(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._choose_highlighted()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(int(event.option.id))

    def action_cursor_up(self) -> None:
        self.query_one(OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one(OptionList).action_cursor_down()

    def action_cancel(self) -> None:
        self.exit(None)

    def matching_indexes(self, query: str) -> list[int]:
        """Indexes of labels matching query, best match first."""
        if not query:
            return list(range(len(self.labels)))
        matcher = Matcher(query)
        scored = [(matcher.match(label), index) for index, label in enumerate(self.labels)]
        # Stable sort keeps the recency order among equal scores
        scored = [item for item in scored if item[0] > 0]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [index for _, index in scored]

    def _refresh_options(self, query: str) -> None:
        option_list = self.query_one(OptionList)
        option_list.clear_options()
        matcher = Matcher(query) if query else None
        options = []
        for index in self.matching_indexes(query):
            label = self.labels[index]
            prompt = matcher.highlight(label) if matcher else Text(label)
            options.append(Option(prompt, id=str(index)))
        option_list.add_options(options)
        if options:
            option_list.highlighted = 0

    def _choose_highlighted(self) -> None:
        option_list = self.query_one(OptionList)
        if option_list.highlighted is None or option_list.option_count == 0:
            return
        option = option_list.get_option_at_index(option_list.highlighted)
        self.exit(int(option.id))


def select_branch(
    records: Sequence[BranchRecord],
    label: Callable[[BranchRecord], str] = format_label,
) -> int:
    """Let the user pick one of records.

    Returns:
        Index into records

    Raises:
        SelectionCancelled: If the user quits the finder, or there is nothing to pick
    """
    if not records:
        raise SelectionCancelled("No branches to choose from")
    index = BranchFinder([label(record) for record in records]).run()
    if index is None or not 0 <= index < len(records):
        raise SelectionCancelled("No branch selected")
    return index
