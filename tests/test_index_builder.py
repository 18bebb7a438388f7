import unittest

from pagesearch.errors import EmptyCorpusError, IndexFrozenError
from pagesearch.index_builder import build
from pagesearch.posting import InvertedIndex, PageHit


class TestBuild(unittest.TestCase):
    def test_counts_per_page(self):
        index = build([("a.pdf", 1, ["cat", "dog", "cat"]), ("b.pdf", 1, ["dog"])], set())
        self.assertEqual(index.get_postings("cat"), (PageHit("a.pdf", 1, 2),))
        self.assertEqual(
            sorted(index.get_postings("dog"), key=lambda h: h.key),
            [PageHit("a.pdf", 1, 1), PageHit("b.pdf", 1, 1)],
        )

    def test_case_insensitive(self):
        index = build([("a.pdf", 1, ["Apple", "apple", "APPLE"])], set())
        self.assertEqual(list(index.tokens()), ["apple"])
        self.assertEqual(index.get_postings("apple")[0].count, 3)

    def test_stop_words_and_empty_tokens_dropped(self):
        index = build([("a.pdf", 1, ["the", "", "The", "cat"])], {"the"})
        self.assertNotIn("the", index)
        self.assertNotIn("", index)
        self.assertIn("cat", index)

    def test_page_of_only_stop_words_has_no_postings(self):
        index = build([("a.pdf", 1, ["and", "or"]), ("a.pdf", 2, ["cat"])], {"and", "or"})
        self.assertEqual(index.page_count(), 1)
        self.assertEqual(index.get_postings("cat"), (PageHit("a.pdf", 2, 1),))

    def test_repeated_page_is_merged_not_duplicated(self):
        index = build([("a.pdf", 1, ["cat"]), ("a.pdf", 1, ["cat", "cat"])], set())
        self.assertEqual(index.get_postings("cat"), (PageHit("a.pdf", 1, 3),))

    def test_empty_corpus_raises(self):
        with self.assertRaises(EmptyCorpusError):
            build([], set())

    def test_pages_without_tokens_are_not_an_empty_corpus(self):
        index = build([("a.pdf", 1, [])], set())
        self.assertEqual(len(index), 0)

    def test_io_error_propagates(self):
        def pages():
            yield "a.pdf", 1, ["cat"]
            raise OSError("disk on fire")

        with self.assertRaises(OSError):
            build(pages(), set())

    def test_index_is_frozen_after_build(self):
        index = build([("a.pdf", 1, ["cat"])], set())
        self.assertTrue(index.frozen)
        with self.assertRaises(IndexFrozenError):
            index.add_page("b.pdf", 1, {"cat": 1})

    def test_unknown_token_has_empty_postings(self):
        index = InvertedIndex().freeze()
        self.assertEqual(index.get_postings("nothing"), ())

    def test_to_dict(self):
        index = build([("a.pdf", 2, ["cat"])], set())
        self.assertEqual(index.to_dict(), {"cat": [{"pdfName": "a.pdf", "page": 2, "count": 1}]})


if __name__ == "__main__":
    unittest.main()
