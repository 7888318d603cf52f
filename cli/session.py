# cli/session.py

"""
The editing session shared by every CLI menu: one course's gradebook plus where it is stored.
"""

from core.gradebook_store import JsonGradebookStore
from core.response import Response
from models.gradebook import Gradebook


class GradebookSession:

    def __init__(self, store: JsonGradebookStore, key: str, gradebook: Gradebook):
        self._store = store
        self._key = key
        self._gradebook = gradebook

    @property
    def key(self) -> str:
        return self._key

    @property
    def gradebook(self) -> Gradebook:
        return self._gradebook

    @property
    def store(self) -> JsonGradebookStore:
        return self._store

    def save(self) -> Response:
        return self._store.save(self._key, self._gradebook)
