"""
Chain TUI Application.

Main entry point for the interactive mode.
"""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from chain.listing import ListingStore, TaskListing
from chain.tui.views.listing import ListingScreen


class ChainApp(App):
    """Interactive task listing with history calendar."""

    TITLE = "chain"
    SUB_TITLE = "daily task tracking"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, listing: TaskListing, store: ListingStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self._listing = listing
        self._store = store

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(ListingScreen(self._listing, self._store))


def run(listing: TaskListing, store: ListingStore) -> None:
    """Run the TUI application until the user quits."""
    app = ChainApp(listing, store)
    app.run()
