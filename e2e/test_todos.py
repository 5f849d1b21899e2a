"""Todo management scenarios"""
from pytest_bdd import scenarios

scenarios('todos.feature')
