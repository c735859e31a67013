#!/usr/bin/env python3
import io
import re
import sqlite3
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "tools"))
import seed  # noqa: E402
import db_probe  # noqa: E402
import db  # noqa: E402
from books import ALL_BOOKS, find_book  # noqa: E402
from db import open_db, init_db  # noqa: E402
from morphology import decode_morphology  # noqa: E402
from sample_corpus import BARA, BARA_RAW, BERESHIT, GEN_XML, write_corpus  # noqa: E402


def long_genesis_xml(chapters):
    body = "".join(
        f'<chapter osisID="Gen.{c}"><verse osisID="Gen.{c}.1">'
        f'<w lemma="1254 a" morph="HVqp3ms" id="{c:02d}bra">{BARA_RAW}</w></verse></chapter>'
        for c in range(1, chapters + 1))
    return f'<osis><osisText><div type="book" osisID="Gen">{body}</div></osisText></osis>'


class SeedTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.corpus = Path(self.tmp.name) / "wlc"
        self.db_path = str(Path(self.tmp.name) / "bible.sqlite3")
        write_corpus(self.corpus)
        with open_db(self.db_path) as conn:
            init_db(conn)
        self.genesis = find_book("genesis")

    def quietly(self, fn, *args, **kwargs):
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            return fn(*args, **kwargs)

    def seed_genesis(self, **kwargs):
        return self.quietly(seed.seed_book, self.genesis, self.db_path, str(self.corpus), **kwargs)

    def count(self, table):
        with open_db(self.db_path) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class SeedBookTests(SeedTestCase):
    def test_loads_book_verses_and_words(self):
        counts = self.seed_genesis()
        self.assertEqual(counts, {"verses": 3, "words": 4})
        self.assertEqual(self.count("bible_books"), 1)
        self.assertEqual(self.count("bible_verses"), 3)
        self.assertEqual(self.count("bible_words"), 4)

    def test_single_verse_end_to_end(self):
        self.seed_genesis()
        with open_db(self.db_path) as conn:
            verse = conn.execute("SELECT * FROM bible_verses WHERE id='gen-1-1'").fetchone()
            words = conn.execute(
                "SELECT * FROM bible_words WHERE verse_id='gen-1-1' ORDER BY position").fetchall()

        self.assertEqual(verse["hebrew_text"], f"{BERESHIT} {BARA}")
        self.assertEqual(verse["word_count"], 2)
        self.assertEqual(len(words), 2)

        first = words[0]
        self.assertEqual(first["is_prefix_compound"], 1)
        self.assertEqual(first["hebrew"], BERESHIT)
        self.assertNotIn("/", first["hebrew"])
        self.assertFalse(any(0x0591 <= ord(ch) <= 0x05AF for ch in first["hebrew"]))
        self.assertEqual(first["lemma"], "H7225")
        self.assertEqual(first["lemma_prefix"], "b")

        decoded = decode_morphology(first["morph"])
        self.assertIn("Preposition", decoded)
        self.assertIn("Noun", decoded)
        self.assertEqual(words[1]["is_prefix_compound"], 0)

    def test_rerun_is_a_no_op(self):
        self.seed_genesis()
        before = [self.count(t) for t in ("bible_books", "bible_verses", "bible_words")]
        again = self.seed_genesis()
        after = [self.count(t) for t in ("bible_books", "bible_verses", "bible_words")]
        self.assertIsNotNone(again)
        self.assertEqual(before, after)

    def test_existing_rows_are_not_overwritten(self):
        self.seed_genesis()
        write_corpus(self.corpus, GEN_XML.replace('lemma="1254 a"', 'lemma="9999"'))
        self.seed_genesis()
        with open_db(self.db_path) as conn:
            lemma = conn.execute("SELECT lemma FROM bible_words WHERE id='01Nvk'").fetchone()[0]
        self.assertEqual(lemma, "H1254")

    def test_small_word_batches_load_everything(self):
        counts = self.seed_genesis(batch_size=1)
        self.assertEqual(counts["words"], 4)
        self.assertEqual(self.count("bible_words"), 4)

    def test_progress_on_first_every_tenth_and_last_chapter(self):
        write_corpus(self.corpus, long_genesis_xml(12))
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            counts = seed.seed_book(self.genesis, self.db_path, str(self.corpus))

        self.assertEqual(counts, {"verses": 12, "words": 12})
        reported = re.findall(r"Chapter (\d+)/50:", out.getvalue())
        self.assertEqual(reported, ["1", "10", "12"])

    def test_missing_file_skips_book_without_writing(self):
        exodus = find_book("exodus")
        result = self.quietly(seed.seed_book, exodus, self.db_path, str(self.corpus))
        self.assertIsNone(result)
        self.assertEqual(self.count("bible_books"), 0)
        self.assertEqual(self.count("bible_verses"), 0)

    def test_malformed_file_skips_book_without_writing(self):
        write_corpus(self.corpus, "<osis><osisText><div>")
        self.assertIsNone(self.seed_genesis())
        self.assertEqual(self.count("bible_books"), 0)
        self.assertEqual(self.count("bible_words"), 0)

    def test_verses_and_words_stay_consistent(self):
        self.seed_genesis()
        with open_db(self.db_path) as conn:
            self.assertEqual(db_probe.verse_integrity_problems(conn), [])
            summary = db_probe.book_summary(conn)
        self.assertEqual(summary, [{"id": "genesis", "name": "Genesis", "verses": 3, "words": 4}])

    def test_probe_reports_missing_words(self):
        self.seed_genesis()
        with open_db(self.db_path) as conn:
            conn.execute("DELETE FROM bible_words WHERE id='01xeN'")
            conn.commit()
            problems = db_probe.verse_integrity_problems(conn)
        self.assertEqual(len(problems), 1)
        self.assertTrue(problems[0].startswith("gen-1-1:"))


class OpenDbTests(unittest.TestCase):
    def test_default_path_is_db_path(self):
        with tempfile.TemporaryDirectory() as td:
            path = str(Path(td) / "default.sqlite3")
            with mock.patch.object(db, "DB_PATH", path):
                with db.open_db() as conn:
                    init_db(conn)
                with db.open_db(None) as conn:
                    tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        self.assertIn("bible_words", tables)


class BatchedTests(unittest.TestCase):
    def test_batched(self):
        self.assertEqual(list(seed.batched(range(5), 2)), [[0, 1], [2, 3], [4]])
        self.assertEqual(list(seed.batched([], 3)), [])


class SelectBooksTests(unittest.TestCase):
    def test_named_books_and_aliases(self):
        books = seed.select_books(["Ruth", "Gen", "genesis"])
        self.assertEqual([b["id"] for b in books], ["ruth", "genesis"])

    def test_unknown_book(self):
        with self.assertRaises(ValueError):
            seed.select_books(["maccabees"])

    def test_all_and_remaining(self):
        self.assertEqual(len(seed.select_books([], all_books=True)), len(ALL_BOOKS))
        remaining = seed.select_books([], remaining=True, existing_ids={"genesis", "ruth"})
        self.assertEqual(len(remaining), len(ALL_BOOKS) - 2)
        self.assertNotIn("genesis", [b["id"] for b in remaining])


class MainTests(SeedTestCase):
    def run_main(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = seed.main(["--db", self.db_path, "--corpus", str(self.corpus), *argv])
        return code, out.getvalue(), err.getvalue()

    def test_no_arguments_prints_usage(self):
        code, out, _ = self.run_main()
        self.assertEqual(code, 0)
        self.assertIn("Available books:", out)
        self.assertIn("song-of-solomon", out)

    def test_seed_named_book(self):
        code, out, _ = self.run_main("genesis")
        self.assertEqual(code, 0)
        self.assertIn("Books seeded: 1", out)
        self.assertIn("Words: 4", out)
        self.assertEqual(self.count("bible_words"), 4)

    def test_unknown_book_exits_with_error(self):
        code, _, err = self.run_main("maccabees")
        self.assertEqual(code, 1)
        self.assertIn("Unknown book", err)

    def test_missing_books_are_skipped_and_others_continue(self):
        code, out, err = self.run_main("exodus", "genesis")
        self.assertEqual(code, 0)
        self.assertIn("Exod.xml", err)
        self.assertIn("Books seeded: 1", out)
        self.assertIn("Skipped: exodus", out)
        self.assertEqual(self.count("bible_verses"), 3)

    def test_database_error_skips_book_and_next_book_loads(self):
        write_corpus(self.corpus, GEN_XML.replace("Gen", "Ruth"), find_book("ruth")["xml_file"])
        real_insert_words = seed.insert_words
        calls = []

        def fail_first_book(conn, rows, *args):
            calls.append(len(rows))
            if len(calls) == 1:
                raise sqlite3.OperationalError("disk I/O error")
            return real_insert_words(conn, rows, *args)

        with mock.patch.object(seed, "insert_words", side_effect=fail_first_book):
            code, out, err = self.run_main("genesis", "ruth")

        self.assertEqual(code, 0)
        self.assertIn("Database error while loading Genesis: disk I/O error", err)
        self.assertIn("Skipped: genesis", out)
        self.assertIn("Books seeded: 1", out)
        with open_db(self.db_path) as conn:
            rows = conn.execute(
                "SELECT book_id, COUNT(*) FROM bible_verses GROUP BY book_id").fetchall()
        self.assertEqual([tuple(r) for r in rows], [("ruth", 3)])
        self.assertEqual(self.count("bible_words"), 4)

    def test_remaining_skips_books_already_loaded(self):
        self.run_main("genesis")
        code, out, _ = self.run_main("--remaining")
        self.assertEqual(code, 0)
        self.assertIn(f"Seeding {len(ALL_BOOKS) - 1} remaining books", out)
        self.assertNotIn("Seeding Genesis", out)


if __name__ == "__main__":
    unittest.main()
