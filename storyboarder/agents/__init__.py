"""AI Agents for Storyboarder."""

from storyboarder.agents.script_agent import ScriptAgent

__all__ = [
    "ScriptAgent",
]
