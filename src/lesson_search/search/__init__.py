"""
Search indexing and query engine package.

- normalizer: markdown to lowercase search text
- index: ordered corpus index with one-time enrichment
- query: weighted substring ranking
- highlight: match highlighting and result excerpts
- engine: session object tying index and navigation together
"""
