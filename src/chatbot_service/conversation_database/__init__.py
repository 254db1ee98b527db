"""
Persistence layer for users and conversation turns.

'data_models' holds the pydantic records and the repository ABCs. Two
interchangeable backends implement them:

- 'in_memory': dict/list based, used by the tests and for local runs.
- 'mongodb': PyMongo's async client, used in production.

'controller' contains the chat bridge that coordinates both repositories and
the LLM.
"""
