from dataclasses import dataclass, field

from label_maker.registry.application.ports import PromptPort


class ConsolePromptIO(PromptPort):
    def input(self, prompt: str = "") -> str:
        try:
            return input(prompt)
        except EOFError:
            return ""


@dataclass(slots=True)
class BufferPromptIO:
    inputs: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    def input(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise AssertionError("BufferPromptIO has no more inputs")
        return self.inputs.pop(0)
