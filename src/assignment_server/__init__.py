"""assignment_server — FastAPI REST API for creating and editing assignments.

Resolves submitted question lists with ``assignment_questions`` and stores
the finished documents through ``assignment_db``.
"""
