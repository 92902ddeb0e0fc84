"""CodePlay -- playground coding projects created from starter templates.

Subpackages:
    tree         - folder/file tree model and its directory/JSON serializer
    templates    - template registry and bundled starter files
    playgrounds  - playground records, stores, and ownership-checked actions
    api          - FastAPI application exposing the template endpoint
"""

__version__ = "0.1.0"
