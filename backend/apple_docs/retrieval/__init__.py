"""Retrieval components: vector math, primary search, related-document discovery.

Submodules are imported directly (``apple_docs.retrieval.search``); the store
layer depends on ``apple_docs.retrieval.vectors``, so nothing is re-exported
here.
"""
