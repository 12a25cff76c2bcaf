from datetime import datetime


class Event:
    """A timestamped description of something that happened to a network."""

    def __init__(self, description):
        self.description = description
        self.date = datetime.now()

    def __eq__(self, other):
        if not isinstance(other, Event):
            return NotImplemented
        return self.description == other.description and self.date == other.date

    def __hash__(self):
        return hash((self.description, self.date))

    def __str__(self):
        return f"{self.date:%Y-%m-%d %H:%M:%S}\n{self.description}"

    def __repr__(self):
        return f"Event({self.description!r}, {self.date.isoformat()})"


class EventLog:
    """Append-only record of events. Owned by whoever creates it; pass it to a
    NeuralNetwork to have layer edits and training runs recorded."""

    def __init__(self):
        self._events = []

    def log_event(self, event):
        if isinstance(event, str):
            event = Event(event)
        self._events.append(event)
        return event

    def clear(self):
        self._events.clear()

    @property
    def events(self):
        return list(self._events)

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self):
        return len(self._events)
