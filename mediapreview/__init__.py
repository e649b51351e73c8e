"""Inline media preview core: content dispatch, document scaling and file previews."""
