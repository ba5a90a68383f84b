"""Starter .docscan.toml and rules.yaml templates."""

DEFAULT_TOML = """\
# docscan configuration

[rules]
file = "rules.yaml"       # active rule set, loaded at startup
directory = "rules"       # named rule sets for POST /ruleset?rule=NAME

[server]
host = "0.0.0.0"
port = 8080
max_upload_mb = 10

[logging]
level = "info"            # debug | info | warn | error
format = "text"           # text | json
output = "stderr"         # stderr | stdout | file
# file = "docscan.log"
"""

DEFAULT_RULES_YAML = """\
# docscan rule set
# severity: low | medium | high | informational
rules:
  - id: email-address
    pattern: '[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\\.[A-Za-z]{2,}'
    severity: low
    description: Contains an email address
  - id: us-ssn
    pattern: '\\b\\d{3}-\\d{2}-\\d{4}\\b'
    severity: high
    description: Looks like a US social security number
  - id: classified-marking
    pattern: '(?i)\\b(top secret|confidential)\\b'
    severity: medium
    description: Contains a classification marking
"""
