"""Page objects built on a shared interaction toolkit"""
from typing import Protocol

from uiharness.pages.login_page import LoginPage
from uiharness.pages.todo_page import TodoItem, TodoPage
from uiharness.pages.toolkit import InteractionToolkit


class PageObject(Protocol):
    """What every page object offers on top of its own semantic actions"""

    toolkit: InteractionToolkit

    def navigate(self) -> None:
        ...

    def is_loaded(self) -> bool:
        ...


__all__ = ['InteractionToolkit', 'LoginPage', 'PageObject', 'TodoItem', 'TodoPage']
