import contextlib
import io
import tempfile
import unittest
from pathlib import Path
from typing import List

from progressive_anagram import AnagramService, KeyValueStore
from progressive_anagram.cli import main, parse_answers, run_interactive


def _scripted(replies: List[str]):
    pending = list(replies)
    prompts: List[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        if not pending:
            raise EOFError
        return pending.pop(0)

    return _input, prompts


class ParseAnswersTests(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertEqual(parse_answers("R=y, s=no,t=YES,"), {"r": True, "s": False, "t": True})
        self.assertEqual(parse_answers(""), {})

    def test_parse_rejects_bad_input(self) -> None:
        for text in ("r", "r=maybe", "rs=y", "1=y"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_answers(text)


class InteractiveTests(unittest.TestCase):
    def test_guesses_word(self) -> None:
        service = AnagramService()
        service.initialize(["cat", "dog"])
        input_fn, prompts = _scripted(["maybe", "y"])
        out: List[str] = []

        result = run_interactive(service, input_fn=input_fn, output_fn=out.append)

        self.assertEqual(result, ["cat"])
        self.assertEqual(len(prompts), 2)
        self.assertIn('Contains "a"?', prompts[0])
        self.assertIn("Please answer y or n.", out)
        self.assertEqual(out[-1], "Your word is: cat")

    def test_quit_and_eof(self) -> None:
        service = AnagramService()
        service.initialize(["cat", "dog"])
        input_fn, _ = _scripted(["q"])
        self.assertIsNone(run_interactive(service, input_fn=input_fn, output_fn=lambda _: None))

        input_fn, _ = _scripted([])
        self.assertIsNone(run_interactive(service, input_fn=input_fn, output_fn=lambda _: None))
        self.assertFalse(service.is_completed)

    def test_indistinguishable_words(self) -> None:
        service = AnagramService()
        service.initialize(["cat", "act"])
        out: List[str] = []
        result = run_interactive(service, input_fn=_scripted([])[0], output_fn=out.append)
        self.assertEqual(result, ["cat", "act"])
        self.assertEqual(out, ["Could not tell these apart: cat, act"])


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store_path = Path(self._tmp.name) / "store.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str):
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main(["--store", str(self.store_path), *argv])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_one_shot_solve(self) -> None:
        code, out, _ = self._run("--words", "cat,dog", "--answers", "A=n")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "dog")

    def test_one_shot_missing_letter(self) -> None:
        code, _, err = self._run("--words", "cat,dog", "--answers", "z=y")
        self.assertEqual(code, 2)
        self.assertIn("letter 'a'", err)

    def test_save_then_use_store(self) -> None:
        code, out, _ = self._run("--words", "cat\ndog", "--entropy", "--save", "--show-tree")
        self.assertEqual(code, 0)
        self.assertIn("Saved 2 words", out)
        self.assertIn("[a]", out)

        stored = KeyValueStore(self.store_path).load("anagram")
        self.assertEqual(stored, {"word_list": "cat\ndog", "use_entropy": True})

        code, out, _ = self._run("--answers", "a=y")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "cat")

    def test_word_file(self) -> None:
        path = Path(self._tmp.name) / "words.txt"
        path.write_text("cat\ndog\n", encoding="utf-8")
        code, out, _ = self._run("--file", str(path), "--answers", "a=y")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "cat")

    def test_interactive_needs_words(self) -> None:
        code, _, err = self._run()
        self.assertEqual(code, 2)
        self.assertIn("at least 2", err)


if __name__ == "__main__":
    unittest.main()
