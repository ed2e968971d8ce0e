# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                    SLASH OPTION SCHEMA & DECLARATIONS                      ║
# ║   Typed parameter descriptors and the payloads pushed to Discord's API     ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

import discord

ChoiceValue = Union[str, int, float]

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ OPTION DATA                                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass
class OptionChoice:
    name: str
    value: ChoiceValue

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


# --- OptionData ---
# One typed parameter of a slash command, e.g. a required string "query".
# `type` is discord.py's AppCommandOptionType so the numeric wire value
# always matches what the client library expects.
@dataclass
class OptionData:
    type: discord.AppCommandOptionType
    name: str
    description: str
    required: bool = False
    choices: List[OptionChoice] = field(default_factory=list)

    # --- add_choice ---
    # Appends a fixed choice and returns self so choices can be chained.
    def add_choice(self, name: str, value: ChoiceValue) -> "OptionData":
        self.choices.append(OptionChoice(name, value))
        return self

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }
        if self.choices:
            payload["choices"] = [choice.to_dict() for choice in self.choices]
        return payload

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ COMMAND DECLARATION                                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- CommandDeclaration ---
# Snapshot of one slash command as submitted in a bulk update.
# Rebuilt on every sync; never stored between syncs.
@dataclass
class CommandDeclaration:
    name: str
    description: str
    options: List[OptionData] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": discord.AppCommandType.chat_input.value,
            "name": self.name,
            "description": self.description,
            "options": [option.to_dict() for option in self.options],
        }
