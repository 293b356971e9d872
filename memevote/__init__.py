"""
MemeVote: Meme Registry with Per-Identity Up-Votes

An in-process registry where identified callers submit meme records,
up-vote each record at most once, and list records by insertion order
or by popularity.
"""

__version__ = "1.0.0"
