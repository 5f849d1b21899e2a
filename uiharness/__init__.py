"""uiharness - data-driven UI test harness built on Playwright and pytest-bdd"""

__version__ = "1.0.0"
