"""
git commit-msg hook: warn when the message does not follow the story format.
Install with: ln -s ../../tools/commit_msg_check.py .git/hooks/commit-msg
"""
import sys

from prd_hooks.hooks.commit_message import main

if len(sys.argv) < 2:
    sys.exit(main([]))
sys.exit(main(["--message-file", sys.argv[1]]))
