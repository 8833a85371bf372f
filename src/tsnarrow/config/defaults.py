"""Starter .tsnarrow.toml template."""

DEFAULT_TOML = """\
# tsnarrow configuration
version = "1.0"

[analysis]
max_file_size_kb = 10240
cache_enabled = true
# cache_dir = "/tmp/tsnarrow-cache"
cache_ttl = 3600          # seconds
ignore_patterns = ["**/node_modules/**", "**/dist/**", "**/build/**"]

[fix]
default_replacement = "unknown"   # unknown | Record<string, unknown> | object
create_backups = true
# backup_dir = ".tsnarrow-backups"

[batch]
# concurrency = 8         # defaults to the number of CPUs
progress_reporting = true
progress_interval_ms = 200

[rules]
# disable = ["EVENT_E", "DATA_OBJECT"]

[logging]
level = "INFO"            # DEBUG | INFO | WARNING | ERROR
format = "console"        # console | json
"""
