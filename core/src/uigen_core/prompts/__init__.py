from uigen_core.prompts.generation import GENERATION_PROMPT

__all__ = ["GENERATION_PROMPT"]
