"""Starter .gitprobe.toml template."""

CONFIG_FILENAME = ".gitprobe.toml"

DEFAULT_TOML = """\
# gitprobe configuration

[status]
include_untracked = true
diff_context_lines = 3

[compare]
target_branch = ""        # empty = auto-detect main / master
diff_context_lines = 3

[git]
binary = "git"
timeout = 0               # seconds to wait for one git command; 0 = no limit

[output]
format = "terminal"       # terminal | json | yaml

[logging]
level = "WARNING"         # DEBUG | INFO | WARNING | ERROR
"""
