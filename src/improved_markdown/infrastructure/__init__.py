"""Infrastructure layer — crypto backend, key session, templates, workspace.

This layer depends on stdlib and third-party libs (cryptography, Jinja2).
It must never import from services, commands, or output.
"""
