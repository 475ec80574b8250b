"""Built-in CLI sub-commands for speccheck.

* :mod:`~speccheck.commands.validate` -- ``schema`` and ``operation``, the
  two validation commands registered directly on the root app.
* :mod:`~speccheck.commands.inspect` -- list the schemas and operations a
  spec declares.
* :mod:`~speccheck.commands.config` -- view and modify global settings.
"""
