import random
import unittest

from relationtrainer.lexicon import (
    FAMILIES,
    SAME_LOCATION,
    VOCABULARY,
    CipherSubstitution,
    Phrasebook,
    SymbolProvider,
    inverse_of,
)
from relationtrainer.lexicon.cipher import NONSENSE_POOL


class CipherTests(unittest.TestCase):
    def test_injective_within_each_family(self) -> None:
        for seed in range(50):
            cipher = CipherSubstitution(random.Random(seed))
            key = cipher.regenerate()
            for name, words in FAMILIES.items():
                self.assertTrue(key.is_injective_over(words), msg=f"{name} seed={seed}")

    def test_tokens_come_from_pool(self) -> None:
        key = CipherSubstitution(random.Random(1)).regenerate()
        self.assertEqual(set(key.mapping), set(VOCABULARY))
        self.assertTrue(set(key.mapping.values()) <= set(NONSENSE_POOL))
        self.assertFalse(key.is_injective_over(VOCABULARY))

    def test_pool_size_bounds(self) -> None:
        with self.assertRaises(ValueError):
            CipherSubstitution(random.Random(0), pool_size=10)
        with self.assertRaises(ValueError):
            CipherSubstitution(random.Random(0), pool_size=len(NONSENSE_POOL) + 1)

    def test_rotation(self) -> None:
        cipher = CipherSubstitution(random.Random(2))
        self.assertTrue(cipher.maybe_rotate(0.0))
        self.assertEqual(cipher.current.generation, 0)
        self.assertFalse(cipher.maybe_rotate(0.0))
        self.assertTrue(cipher.maybe_rotate(1.0))
        self.assertEqual(cipher.current.generation, 1)


class PhrasebookTests(unittest.TestCase):
    def test_ciphered_statement_and_keys(self) -> None:
        key = CipherSubstitution(random.Random(3)).regenerate()
        book = Phrasebook(key)
        tok = key.token("greater")
        self.assertEqual(book.statement("A", ("greater",), "B"), f"A {tok} B")
        self.assertEqual(book.question("A", ("greater",), "C"), f"Is A {tok} C?")
        self.assertEqual(book.used_keys(), (("greater", tok),))

    def test_unmapped_keyword_stays_natural(self) -> None:
        key = CipherSubstitution(random.Random(3)).regenerate()
        book = Phrasebook(key)
        self.assertEqual(book.statement("A", (SAME_LOCATION,), "B"), "A is at the same location as B")
        self.assertEqual(book.used_keys(), ())

    def test_compound_descriptor(self) -> None:
        text = Phrasebook().statement("A", ("north-east", "above"), "B")
        self.assertEqual(text, "A is north-east of and above B")

    def test_inverses_are_symmetric(self) -> None:
        for kw in VOCABULARY:
            self.assertEqual(inverse_of(inverse_of(kw)), kw)


class SymbolProviderTests(unittest.TestCase):
    def test_distinct_symbols_per_style(self) -> None:
        rng = random.Random(0)
        for style in ("letters", "syllables", "numbers"):
            items = SymbolProvider(rng, style).take(8)
            self.assertEqual(len(set(items)), 8)

    def test_letters_extend_past_alphabet(self) -> None:
        items = SymbolProvider(random.Random(0), "letters").take(30)
        self.assertEqual(len(set(items)), 30)

    def test_unknown_style(self) -> None:
        with self.assertRaises(ValueError):
            SymbolProvider(random.Random(0), "emoji")


if __name__ == "__main__":
    unittest.main()
