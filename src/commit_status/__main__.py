"""Allow `python -m commit_status`."""

from commit_status.main import main

main()
