# Interactive command loop: read a command word, ask for whatever that command
# needs, call the store, print the result.
#
# CalendarErrors raised by a command become one printed line and the loop goes on.
# "exit" or EOF on stdin ends the session with status 0.

from __future__ import annotations
from typing import Callable, Dict, Iterable, Optional

from almanac.calendar.errors import CalendarError, EventNotFoundError
from almanac.calendar.event import Event, check_date, check_text, check_time
from almanac.calendar.store import CalendarStore
from almanac.core.prompter import PromptClosed, Prompter
from almanac.utils.config import CONFIG
from almanac.utils.debug import debug_log

HELP_TEXT = """Available commands:
    create   - Create a new event
    delete   - Delete an event
    list     - List all events
    load     - Load calendar from file
    save     - Save calendar to file
    upcoming - Show upcoming events
    update   - Update an event
    view     - View an event
    search   - Search for an event
    help     - Show this help message
    exit     - Exit the program"""


def _blank_or(check: Callable[[str], str]) -> Callable[[str], str]:
    def inner(value: str) -> str:
        return value if value == "" else check(value)
    return inner


class CalendarShell:
    def __init__(self, store: Optional[CalendarStore] = None, prompter: Optional[Prompter] = None,
                 default_file: Optional[str] = None):
        self.store = store if store is not None else CalendarStore()
        self.io = prompter or Prompter()
        self.default_file = default_file or CONFIG["storage"]["default_file"]
        self.commands: Dict[str, Callable[[], None]] = {
            "create": self.cmd_create,
            "delete": self.cmd_delete,
            "list": self.cmd_list,
            "load": self.cmd_load,
            "save": self.cmd_save,
            "upcoming": self.cmd_upcoming,
            "update": self.cmd_update,
            "view": self.cmd_view,
            "search": self.cmd_search,
            "help": self.cmd_help,
        }

    def run(self) -> int:
        self.io.say("Welcome to calendar!")
        while True:
            command = self.io.command()
            if command is None:
                debug_log("stdin closed")
                break
            try:
                if not self.handle(command):
                    break
            except PromptClosed:
                debug_log(f"stdin closed during '{command}'")
                break
        return 0

    def handle(self, command: str) -> bool:
        """Run one command. Returns False when the session should end."""
        if not command:
            return True
        if command == "exit":
            return False
        handler = self.commands.get(command)
        if handler is None:
            self.io.say(f"Unknown command: {command}")
            return True
        try:
            handler()
        except CalendarError as e:
            debug_log(f"{command}: {e.code.value}")
            self.io.say(str(e))
        return True

    def _show(self, events: Iterable[Event]) -> None:
        shown = 0
        for e in events:
            self.io.say(e.pretty())
            shown += 1
        if not shown:
            self.io.say("No events found.")

    # ---- commands ----

    def cmd_create(self):
        title = self.io.ask_field("Enter event title: ", check_text)
        date = self.io.ask_field("Enter event date (YYYY-MM-DD): ", check_date)
        time = self.io.ask_field("Enter event time (HH:MM): ", check_time)
        description = self.io.ask_field("Enter event description: ", check_text)
        event_id = self.store.create(title, date, time, description)
        self.io.say(f"Event created successfully (id={event_id}).")

    def cmd_delete(self):
        event_id = self.io.ask_u64("Enter the ID of the event to delete: ")
        if not self.store.delete(event_id):
            raise EventNotFoundError(event_id)
        self.io.say("Event deleted successfully.")

    def cmd_list(self):
        self._show(self.store.list())

    def cmd_upcoming(self):
        self._show(self.store.upcoming())

    def cmd_update(self):
        event_id = self.io.ask_u64("Enter the ID of the event to update: ")
        self.store.require(event_id)
        title = self.io.ask_field(
            "Enter new event title (leave blank to keep current): ", _blank_or(check_text))
        date = self.io.ask_field(
            "Enter new event date (YYYY-MM-DD) (leave blank to keep current): ", _blank_or(check_date))
        time = self.io.ask_field(
            "Enter new event time (HH:MM) (leave blank to keep current): ", _blank_or(check_time))
        description = self.io.ask_field(
            "Enter new event description (leave blank to keep current): ", _blank_or(check_text))
        if not self.store.update(event_id, title=title, date=date, time=time, description=description):
            raise EventNotFoundError(event_id)
        self.io.say("Event updated successfully.")

    def cmd_view(self):
        event_id = self.io.ask_u64("Enter the ID of the event to view: ")
        self.io.say(self.store.require(event_id).pretty())

    def cmd_search(self):
        query = self.io.ask("Enter search query: ")
        self._show(self.store.search(query))

    def load_file(self, path: str) -> None:
        report = self.store.load(path)
        for skipped in report.reported:
            self.io.say(f"invalid event: {skipped.reason}")
        self.io.say("Calendar loaded successfully.")

    def cmd_load(self):
        path = self.io.ask("Enter path to load calendar from: ") or self.default_file
        self.load_file(path)

    def cmd_save(self):
        path = self.io.ask("Enter path to save calendar: ") or self.default_file
        self.store.save(path)
        self.io.say("Calendar saved successfully.")

    def cmd_help(self):
        self.io.say(HELP_TEXT)
