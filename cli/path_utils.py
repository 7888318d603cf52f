# cli/path_utils.py

import os

STORE_DIR_ENV_VAR = "GRADEBOOK_STORE_DIR"


def get_store_dir(user_input: str | None) -> str:
    """
    Picks the gradebook store directory from user input, the environment, or the default location.

    Args:
        user_input (str | None): An optional user-specified directory path. If None or blank, the
            `GRADEBOOK_STORE_DIR` environment variable is used, then the default path.

    Returns:
        An expanded path string. Defaults to `~/Documents/Gradebooks`.
    """
    if user_input is not None and user_input.strip():
        return os.path.expanduser(user_input.strip())

    env_dir = os.environ.get(STORE_DIR_ENV_VAR, "").strip()
    if env_dir:
        return os.path.expanduser(env_dir)

    documents = os.path.join(os.path.expanduser("~"), "Documents")
    return os.path.join(documents, "Gradebooks")


def resolve_store_dir(dir_input: str | None) -> str:
    """
    Produces and ensures a valid directory for the JSON gradebook store.

    Returns:
        A fully resolved, absolute directory path, created on disk (including parent directories)
        if it does not exist.
    """
    store_dir = os.path.abspath(get_store_dir(dir_input))

    os.makedirs(store_dir, exist_ok=True)

    return store_dir
