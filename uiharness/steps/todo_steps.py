"""Todo step definitions"""
from pytest_bdd import given, parsers, then, when

from uiharness.pages.todo_page import PAGE_URL, SELECTORS, TodoItem
from uiharness.steps import open_page, table_hashes


def _item_from_row(row) -> TodoItem:
    return TodoItem(
        title=row.get('title', ''),
        description=row.get('description', ''),
        priority=row.get('priority') or None,
        completed=row.get('completed', '').lower() == 'true',
    )


@given('I am on the todos page')
def on_todos_page(world):
    open_page(world.todo_page, 'Todos page')
    world.logger.info('User is on the todos page')


@when(parsers.re(r'I add a new todo with title "(?P<title>[^"]*)"$'))
def add_todo(world, title):
    world.todo_page.add_todo(TodoItem(title=title))
    world.logger.info(f"Added new todo: {title}")


@when('I add a new todo with the following details:')
def add_todo_with_details(world, datatable):
    rows = table_hashes(datatable)
    assert rows, 'Expected a data table with at least one row'
    todo = _item_from_row(rows[0])
    world.todo_page.add_todo(todo)
    world.logger.info(f"Added new todo with details: {todo}")


@when(parsers.parse('I add a new todo with title "{title}" and priority "{priority}"'))
def add_todo_with_priority(world, title, priority):
    world.todo_page.add_todo(TodoItem(title=title, priority=priority))
    world.logger.info(f"Added new todo: {title} with priority: {priority}")


@then(parsers.parse('I should see the todo "{title}" in the list'))
def see_todo(world, title):
    world.todo_page.assert_exists(title)


@then(parsers.parse('I should not see the todo "{title}" in the list'))
def not_see_todo(world, title):
    world.todo_page.assert_not_exists(title)


@then(parsers.parse('the todo counter should show "{expected}"'))
def counter_shows(world, expected):
    counter = world.todo_page.get_counter() or ''
    assert expected in counter, f'Expected counter to contain "{expected}", got "{counter}"'


@then(parsers.parse('the todo should have description "{description}"'))
def todo_has_description(world, description):
    toolkit = world.todo_page.toolkit
    toolkit.assert_visible(toolkit.locator(SELECTORS['item_description']).filter(has_text=description),
                           f"Description {description}")


@then(parsers.parse('the todo should have priority "{priority}"'))
def todo_has_priority(world, priority):
    toolkit = world.todo_page.toolkit
    toolkit.assert_visible(toolkit.locator(SELECTORS['item_priority']).filter(has_text=priority),
                           f"Priority {priority}")


@given(parsers.parse('I have a todo "{title}"'))
def have_todo(world, title):
    page = world.todo_page
    page.add_todo(TodoItem(title=title))
    page.assert_exists(title)
    world.logger.info(f"Created todo for test: {title}")


@when(parsers.parse('I mark the todo "{title}" as completed'))
def mark_completed(world, title):
    world.todo_page.toggle_todo_completion(title)


@then(parsers.parse('the todo "{title}" should be marked as completed'))
def is_completed(world, title):
    world.todo_page.assert_completed(title)


@when(parsers.parse('I edit the todo "{current_title}" to have title "{new_title}"'))
def edit_todo(world, current_title, new_title):
    world.todo_page.edit_todo(current_title, title=new_title)
    world.logger.info(f'Edited todo from "{current_title}" to "{new_title}"')


@when(parsers.parse('I delete the todo "{title}"'))
def delete_todo(world, title):
    world.todo_page.delete_todo(title)


@given('I have the following todos:')
def have_todos(world, datatable):
    page = world.todo_page
    rows = table_hashes(datatable)
    for row in rows:
        todo = _item_from_row(row)
        page.add_todo(todo)
        if todo.completed:
            page.toggle_todo_completion(todo.title)
    world.logger.info(f"Created {len(rows)} todos for test")


@when(parsers.parse('I filter todos by "{name}"'))
def filter_todos(world, name):
    world.todo_page.filter(name)


@then(parsers.re(r'I should see (?P<count>\d+) todos? in the list'), converters={'count': int})
def see_todo_count(world, count):
    world.todo_page.assert_count(count)


@when(parsers.parse('I search for "{term}"'))
def search_todos(world, term):
    world.todo_page.search(term)


@when('I clear all completed todos')
def clear_completed(world):
    world.todo_page.clear_completed()


@when('I try to add a todo with empty title')
def add_empty_todo(world):
    page = world.todo_page
    page.toolkit.fill(SELECTORS['title_input'], '', 'Todo Title Input')
    page.toolkit.click(SELECTORS['add_button'], 'Add Todo Button')
    world.logger.info('Attempted to add todo with empty title')


@then('the todo should not be added to the list')
def empty_todo_not_added(world):
    empty = [todo for todo in world.todo_page.get_all_todos() if todo.title == '']
    assert not empty, f"Found {len(empty)} todos with an empty title"


@then(parsers.parse('I should see the todo "{title}" with priority "{priority}"'))
def see_todo_with_priority(world, title, priority):
    page = world.todo_page
    page.assert_exists(title)
    page.assert_priority(title, priority)


@given('I have no todos')
def have_no_todos(world):
    page = world.todo_page
    for todo in page.get_all_todos():
        page.delete_todo(todo.title)
    page.assert_count(0)


@then('I should see the empty state message')
def see_empty_state(world):
    assert world.todo_page.is_empty_state_displayed(), 'Empty state is not displayed'


@then(parsers.parse('the message should say "{message}"'))
def empty_state_says(world, message):
    world.todo_page.toolkit.assert_text(SELECTORS['empty_state'], message, 'Empty State')


@when('I refresh the page')
def refresh(world):
    world.todo_page.toolkit.reload()


@then(parsers.parse('I should still see the todo "{title}" in the list'))
def still_see_todo(world, title):
    world.todo_page.assert_exists(title)


@when('I logout from the application')
def logout(world):
    world.todo_page.logout()


@then('I should be redirected to the login page')
def redirected_to_login(world):
    assert world.login_page.is_loaded(), 'Login page is not displayed after logout'
    world.login_page.toolkit.assert_hidden(SELECTORS['todo_list'], 'Todo List')


@then('I should not be able to access the todos page without logging in')
def todos_page_is_protected(world):
    toolkit = world.todo_page.toolkit
    toolkit.navigate_to(PAGE_URL)
    assert world.login_page.is_loaded(), 'Todos page was reachable without logging in'
    world.logger.info('Verified todos page is protected and redirects to login')
