"""prompt_toolkit completer for the codelabel shell."""

from __future__ import annotations

import shlex
from typing import Iterable, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .commands import CommandRegistry
from .context import LabelContext
from .regions import REGION_TAGS, CpuType

_LABEL_TARGET_COMMANDS = {"show", "remove"}
_REGION_COMMANDS = {"add", "encode"}


def _normalise_tokens(text: str) -> List[str]:
    if not text:
        return []
    try:
        tokens = shlex.split(text, posix=True)
        trailing = text[-1].isspace()
    except ValueError:
        tokens = text.strip().split()
        trailing = text.endswith((" ", "\t"))
    if trailing:
        tokens.append("")
    return tokens


class LabelCompleter(Completer):
    """Completes command names, region tags, processor names and label names."""

    def __init__(self, ctx: LabelContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        tokens = _normalise_tokens(document.text_before_cursor)
        prefix = tokens[-1] if tokens else ""
        if len(tokens) <= 1:
            candidates = self._command_names()
        else:
            command = self.registry.get(self.ctx.resolve_alias(tokens[0]))
            name = command.name if command else tokens[0]
            candidates = self._argument_candidates(name, tokens)
        for entry in self._format_candidates(candidates, prefix):
            yield Completion(entry, start_position=-len(prefix))

    def _command_names(self) -> List[str]:
        names: List[str] = []
        for command in self.registry.list_commands():
            names.append(command.name)
            names.extend(command.aliases)
        return names

    def _argument_candidates(self, command: str, tokens: List[str]) -> List[str]:
        previous = tokens[-2]
        if previous == "--region":
            return list(REGION_TAGS.values())
        if previous == "--cpu":
            return [member.value for member in CpuType]
        position = len(tokens) - 1
        if command in _REGION_COMMANDS and position == 1:
            return list(REGION_TAGS.values())
        if command in _LABEL_TARGET_COMMANDS and position == 1:
            return self.ctx.label_names()[:64]
        if command == "help" and position == 1:
            return self._command_names()
        return []

    @staticmethod
    def _format_candidates(candidates: Iterable[str], prefix: str = "") -> List[str]:
        if not prefix:
            return sorted(dict.fromkeys(candidates))
        needle = prefix.lower()
        return sorted(dict.fromkeys(c for c in candidates if c.lower().startswith(needle)))
