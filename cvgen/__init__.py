"""
CVGEN - CV generation from a JSON-Resume master profile

Maintains a master profile in JSON-Resume format, renders tailored CV variants
through selectable visual themes, and synchronizes profiles, CVs and cover
letters with the remote CV API.

Architecture:
- Profile Context: JSON-Resume data model, section registry, completion, import/export
- Rendering Context: Theme descriptors and the table-driven HTML/markdown render engine
- Persistence Context: Authenticated API client, query cache, debounced auto-save
"""

__version__ = "0.1.0"
