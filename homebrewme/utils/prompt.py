"""Line-based operator prompts."""

from abc import ABC, abstractmethod

from ..core.migrator import Decision, parse_decision


class Prompt(ABC):
    """Blocking questions asked during a migration run."""

    @abstractmethod
    def read_line(self, question: str) -> str:
        """Return one line of operator input."""

    def ask_decision(self, question: str) -> Decision:
        return parse_decision(self.read_line(question))

    def confirm(self, question: str) -> bool:
        return self.read_line(question).strip().lower() == 'y'


class ConsolePrompt(Prompt):
    """Prompt on the controlling terminal; blocks until the operator answers."""

    def read_line(self, question):
        try:
            return input(question)
        except EOFError:
            # Closed stdin answers every question with the default
            print()
            return ""
