"""Static prefix tree used to recognise dictionary words inside letter runs."""
from __future__ import annotations

from typing import Dict, Iterable, Optional


class TrieNode:
    """
    One node of the tree.
    children: char -> TrieNode
    terminal: the path from the root to here spells a dictionary word
    """

    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.terminal = False


class PrefixTree:
    """Built once from a word list and read-only afterwards."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self.root = TrieNode()
        self.size = 0
        for word in words:
            self._insert(word)

    def _insert(self, word: str) -> None:
        if not word:
            return
        node = self.root
        for ch in word:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = TrieNode()
            node = nxt
        if not node.terminal:
            node.terminal = True
            self.size += 1

    @staticmethod
    def step(node: TrieNode, ch: str) -> Optional[TrieNode]:
        """Follow one character from node; None means no word continues this way."""
        return node.children.get(ch)

    def walk(self, text: str) -> Optional[TrieNode]:
        node: Optional[TrieNode] = self.root
        for ch in text:
            node = self.step(node, ch)
            if node is None:
                return None
        return node

    def contains(self, word: str) -> bool:
        node = self.walk(word)
        return node is not None and node.terminal

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return self.size
