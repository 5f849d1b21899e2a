"""Todo page object"""
from dataclasses import dataclass
from typing import List, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from uiharness.pages.toolkit import InteractionToolkit

PAGE_URL = '/todos'
PRIORITIES = ('low', 'medium', 'high', 'urgent')
FILTERS = ('all', 'active', 'completed')

SELECTORS = {
    # Header and navigation
    'page_title': '[data-testid="page-title"]',
    'user_menu': '[data-testid="user-menu"]',
    'logout_button': '[data-testid="logout-button"]',

    # Creation form
    'add_todo_form': '[data-testid="add-todo-form"]',
    'title_input': '[data-testid="todo-title-input"]',
    'description_input': '[data-testid="todo-description-input"]',
    'priority_select': '[data-testid="todo-priority-select"]',
    'add_button': '[data-testid="add-todo-button"]',

    # List
    'todo_list': '[data-testid="todo-list"]',
    'todo_item': '[data-testid="todo-item"]',
    'item_title': '[data-testid="todo-item-title"]',
    'item_description': '[data-testid="todo-item-description"]',
    'item_priority': '[data-testid="todo-item-priority"]',
    'item_checkbox': '[data-testid="todo-item-checkbox"]',
    'item_edit': '[data-testid="todo-item-edit"]',
    'item_delete': '[data-testid="todo-item-delete"]',

    # Edit modal
    'edit_modal': '[data-testid="edit-todo-modal"]',
    'edit_title_input': '[data-testid="edit-todo-title-input"]',
    'edit_description_input': '[data-testid="edit-todo-description-input"]',
    'edit_priority_select': '[data-testid="edit-todo-priority-select"]',
    'save_edit_button': '[data-testid="save-edit-button"]',
    'cancel_edit_button': '[data-testid="cancel-edit-button"]',

    # Filters and search
    'search_input': '[data-testid="search-input"]',
    'filter_all': '[data-testid="filter-all"]',
    'filter_active': '[data-testid="filter-active"]',
    'filter_completed': '[data-testid="filter-completed"]',
    'clear_completed': '[data-testid="clear-completed"]',

    # Status
    'todo_counter': '[data-testid="todo-counter"]',
    'empty_state': '[data-testid="empty-state"]',
    'success_message': '[data-testid="success-message"]',
    'error_message': '[data-testid="error-message"]',
}

# Debounce applied by the app to search and filter changes
SETTLE_MS = 500


@dataclass
class TodoItem:
    title: str
    description: str = ''
    completed: bool = False
    priority: Optional[str] = None


class TodoPage:
    """Semantic actions on the todo list screen"""

    selectors = SELECTORS

    def __init__(self, toolkit: InteractionToolkit):
        self.toolkit = toolkit
        self.logger = toolkit.logger

    def navigate(self) -> None:
        self.toolkit.navigate_to(PAGE_URL)
        self.toolkit.wait_for_page_load()

    def is_loaded(self) -> bool:
        loaded = self.toolkit.wait_for_all_visible([
            (SELECTORS['page_title'], 'Page Title'),
            (SELECTORS['add_todo_form'], 'Add Todo Form'),
            (SELECTORS['todo_list'], 'Todo List'),
        ])
        if not loaded:
            self.logger.error('Todo page is not loaded correctly')
        return loaded

    def item(self, title: str):
        """Locator for the todo row containing title"""
        return self.toolkit.locator(SELECTORS['todo_item']).filter(has_text=title)

    def add_todo(self, todo: TodoItem) -> None:
        self.logger.info(f"Adding new todo: {todo.title}")
        self.toolkit.fill(SELECTORS['title_input'], todo.title, 'Todo Title Input')
        if todo.description:
            self.toolkit.fill(SELECTORS['description_input'], todo.description, 'Todo Description Input')
        if todo.priority:
            self.toolkit.select(SELECTORS['priority_select'], todo.priority, 'Todo Priority Select')
        self.toolkit.click(SELECTORS['add_button'], 'Add Todo Button')
        self._wait_for_todo_to_be_added()

    def _wait_for_todo_to_be_added(self) -> None:
        try:
            self.toolkit.wait_visible(SELECTORS['success_message'], 'Success Message', timeout=5000)
        except PlaywrightTimeoutError:
            self.logger.debug('Todo addition confirmation not detected')

    def get_all_todos(self) -> List[TodoItem]:
        todos = []
        for element in self.toolkit.locator(SELECTORS['todo_item']).all():
            title = self.toolkit.text(element.locator(SELECTORS['item_title']), 'Todo Item Title') or ''
            description = self.toolkit.text(element.locator(SELECTORS['item_description']),
                                            'Todo Item Description') or ''
            priority = self.toolkit.text(element.locator(SELECTORS['item_priority']), 'Todo Item Priority') or 'medium'
            completed = self.toolkit.is_checked(element.locator(SELECTORS['item_checkbox']), 'Todo Item Checkbox')
            todos.append(TodoItem(
                title=title.strip(),
                description=description.strip(),
                completed=completed,
                priority=priority.strip().lower(),
            ))
        return todos

    def get_todo_by_title(self, title: str) -> Optional[TodoItem]:
        return next((todo for todo in self.get_all_todos() if todo.title == title), None)

    def toggle_todo_completion(self, title: str) -> None:
        self.logger.info(f"Toggling completion for todo: {title}")
        self.toolkit.click(self.item(title).locator(SELECTORS['item_checkbox']), f"Todo {title} checkbox")

    def edit_todo(self, current_title: str, title: Optional[str] = None,
                  description: Optional[str] = None, priority: Optional[str] = None) -> None:
        self.logger.info(f"Editing todo: {current_title}")
        self.toolkit.click(self.item(current_title).locator(SELECTORS['item_edit']), f"Todo {current_title} edit button")
        self.toolkit.wait_visible(SELECTORS['edit_modal'], 'Edit Todo Modal')

        if title:
            self.toolkit.clear_and_fill(SELECTORS['edit_title_input'], title, 'Edit Todo Title Input')
        if description is not None:
            self.toolkit.clear_and_fill(SELECTORS['edit_description_input'], description,
                                        'Edit Todo Description Input')
        if priority:
            self.toolkit.select(SELECTORS['edit_priority_select'], priority, 'Edit Todo Priority Select')

        self.toolkit.click(SELECTORS['save_edit_button'], 'Save Edit Button')
        self.toolkit.wait_hidden(SELECTORS['edit_modal'], 'Edit Todo Modal')

    def delete_todo(self, title: str) -> None:
        self.logger.info(f"Deleting todo: {title}")
        self.toolkit.click(self.item(title).locator(SELECTORS['item_delete']), f"Todo {title} delete button")
        self.toolkit.wait_hidden(self.item(title).first, f"Todo item: {title}")

    def search(self, term: str) -> None:
        self.logger.info(f"Searching for todos with term: {term}")
        self.toolkit.fill(SELECTORS['search_input'], term, 'Search Input')
        self.toolkit.page.wait_for_timeout(SETTLE_MS)

    def clear_search(self) -> None:
        self.toolkit.clear_and_fill(SELECTORS['search_input'], '', 'Search Input')
        self.toolkit.page.wait_for_timeout(SETTLE_MS)

    def filter(self, name: str) -> None:
        if name not in FILTERS:
            raise ValueError(f"Unknown filter '{name}', expected one of {FILTERS}")
        self.logger.info(f"Filtering todos by: {name}")
        self.toolkit.click(SELECTORS[f'filter_{name}'], f"Filter {name} Button")
        self.toolkit.page.wait_for_timeout(SETTLE_MS)

    def clear_completed(self) -> None:
        self.logger.info('Clearing all completed todos')
        self.toolkit.click(SELECTORS['clear_completed'], 'Clear Completed Button')

    def get_counter(self) -> Optional[str]:
        return self.toolkit.text(SELECTORS['todo_counter'], 'Todo Counter')

    def is_empty_state_displayed(self) -> bool:
        return self.toolkit.is_visible(SELECTORS['empty_state'], 'Empty State')

    def assert_count(self, expected: int) -> None:
        actual = len(self.get_all_todos())
        if actual != expected:
            raise AssertionError(f"Expected {expected} todos, but found {actual}")
        self.logger.info(f"Verified todo count: {expected}")

    def assert_exists(self, title: str) -> None:
        if self.get_todo_by_title(title) is None:
            raise AssertionError(f'Todo with title "{title}" not found')
        self.logger.info(f"Verified todo exists: {title}")

    def assert_not_exists(self, title: str) -> None:
        if self.get_todo_by_title(title) is not None:
            raise AssertionError(f'Todo with title "{title}" should not exist but was found')
        self.logger.info(f"Verified todo does not exist: {title}")

    def assert_completed(self, title: str) -> None:
        self.toolkit.assert_checked(self.item(title).locator(SELECTORS['item_checkbox']), f"Todo {title} checkbox")

    def assert_priority(self, title: str, priority: str) -> None:
        self.toolkit.assert_text(self.item(title).locator(SELECTORS['item_priority']), priority,
                                 f"Todo {title} priority")

    def logout(self) -> None:
        self.logger.info('Logging out from the application')
        self.toolkit.click(SELECTORS['user_menu'], 'User Menu')
        self.toolkit.click(SELECTORS['logout_button'], 'Logout Button')

    def get_success_message(self) -> Optional[str]:
        return self._message(SELECTORS['success_message'], 'Success Message')

    def get_error_message(self) -> Optional[str]:
        return self._message(SELECTORS['error_message'], 'Error Message')

    def _message(self, selector: str, name: str) -> Optional[str]:
        try:
            self.toolkit.wait_visible(selector, name, timeout=5000)
            return self.toolkit.text(selector, name)
        except PlaywrightTimeoutError:
            self.logger.debug(f"No {name.lower()} found")
            return None
