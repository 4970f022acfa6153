from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import pygame

from .service import AnagramService
from .words import load_word_list, parse_word_list

DEFAULT_WORDS = ("Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto")


@dataclass(frozen=True)
class UIConfig:
    width: int = 720
    height: int = 520
    fps: int = 60
    margin: int = 24
    entropy: bool = False


BACKGROUND = (18, 18, 19)
TEXT = (245, 245, 245)
MUTED = (155, 155, 160)
BORDER = (58, 58, 61)
YES_COLOR = (83, 141, 78)
NO_COLOR = (58, 58, 60)
RESULT_COLOR = (181, 159, 59)


def _trail_text(path: Sequence[Tuple[str, bool]]) -> str:
    if not path:
        return "No answers yet."
    return "  ".join(f"{letter.upper()}:{'Y' if yes else 'N'}" for letter, yes in path)


def _result_message(result: Sequence[str]) -> str:
    if len(result) == 1:
        return f"Your word is {result[0]}. Press R to play again."
    if result:
        return f"Could not tell apart: {', '.join(result)} (press R)"
    return "No candidates left. Press R to play again."


class AnagramPygameApp:
    def __init__(self, config: UIConfig, words: Sequence[str]) -> None:
        self.cfg = config
        self.service = AnagramService()
        started = self.service.initialize(words, entropy=config.entropy)
        if not started["success"]:
            raise ValueError(str(started["error"]))

        pygame.init()
        pygame.display.set_caption("Progressive Anagram")

        self.width = config.width
        self.height = config.height
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()

        self.font_title = pygame.font.SysFont("arial", 36, bold=True)
        self.font_question = pygame.font.SysFont("arial", 40, bold=True)
        self.font_text = pygame.font.SysFont("arial", 24)
        self.font_small = pygame.font.SysFont("arial", 18)

        self.message = ""
        self.last_answer: Optional[bool] = None
        self._reset()

    def _reset(self) -> None:
        self.service.reset()
        self.last_answer = None
        self.message = "Think of a word from the list. Press Y or N."

    def _answer(self, yes: bool) -> None:
        if self.service.is_completed:
            return
        reply = self.service.answer_question(yes)
        if not reply["success"]:
            self.message = str(reply["error"])
            return

        self.last_answer = yes
        if reply["completed"]:
            self.message = _result_message(list(reply["result"]))  # type: ignore[call-overload]
        else:
            self.message = f"Question {reply['step']}"

    def _on_keydown(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_ESCAPE:
            pygame.quit()
            sys.exit(0)

        if event.key == pygame.K_r:
            self._reset()
            return

        if event.key == pygame.K_y:
            self._answer(True)
            return

        if event.key == pygame.K_n:
            self._answer(False)

    def _draw_question(self) -> None:
        status = self.service.status()
        question = status.get("current_question")
        label = str(question) if question else "Done"
        text = self.font_question.render(label, True, TEXT)
        rect = text.get_rect(center=(self.width // 2, 150))
        box = rect.inflate(self.cfg.margin * 2, self.cfg.margin)
        color = BORDER
        if self.last_answer is not None:
            color = YES_COLOR if self.last_answer else NO_COLOR
        if status.get("completed"):
            color = RESULT_COLOR
        pygame.draw.rect(self.screen, color, box, width=2, border_radius=8)
        self.screen.blit(text, rect)

        count = self.font_text.render(f"{status.get('candidate_count', 0)} candidates", True, MUTED)
        self.screen.blit(count, count.get_rect(center=(self.width // 2, 220)))

        path: List[Tuple[str, bool]] = list(status.get("path") or [])  # type: ignore[call-overload]
        trail = self.font_small.render(_trail_text(path), True, MUTED)
        self.screen.blit(trail, trail.get_rect(center=(self.width // 2, 270)))

    def _draw(self) -> None:
        self.screen.fill(BACKGROUND)
        title = self.font_title.render("PROGRESSIVE ANAGRAM", True, TEXT)
        self.screen.blit(title, title.get_rect(center=(self.width // 2, 40)))

        subtitle_text = "Entropy mode" if self.cfg.entropy else "Balanced mode"
        subtitle = self.font_small.render(subtitle_text, True, MUTED)
        self.screen.blit(subtitle, subtitle.get_rect(center=(self.width // 2, 72)))

        self._draw_question()

        msg = self.font_text.render(self.message, True, TEXT)
        self.screen.blit(msg, msg.get_rect(center=(self.width // 2, self.height - 90)))

        help_text = self.font_small.render("Y=yes  N=no  R=restart  Esc=quit", True, MUTED)
        self.screen.blit(help_text, help_text.get_rect(center=(self.width // 2, self.height - 18)))

        pygame.display.flip()

    def run(self) -> None:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    return
                if event.type == pygame.KEYDOWN:
                    self._on_keydown(event)
            self._draw()
            self.clock.tick(self.cfg.fps)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play progressive anagram with a Pygame UI.")
    parser.add_argument("--words", "-w", type=str, help="Comma or newline separated word list.")
    parser.add_argument("--file", "-f", type=str, help="Read the word list from a text file.")
    parser.add_argument("--entropy", action="store_true", help="Pick questions by information gain.")
    args = parser.parse_args()

    if args.words:
        words = parse_word_list(args.words)
    elif args.file:
        words = load_word_list(args.file)
    else:
        words = list(DEFAULT_WORDS)

    app = AnagramPygameApp(UIConfig(entropy=args.entropy), words)
    app.run()


if __name__ == "__main__":
    main()
