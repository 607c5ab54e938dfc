"""Pull and push against the dev.to article API.

pull: every article of the authenticated user → articles/<date>_<id>.md
push: local .md files without an id → new posts, renamed to <name>_<id>.md
"""
