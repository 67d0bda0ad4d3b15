# analytics/__init__.py
# offline evaluation tooling for the autocompleter (not part of the engine)
