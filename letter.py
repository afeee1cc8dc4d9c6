# letter.py

import asyncio
import logging

import pygame

import constants

logger = logging.getLogger("heart_tree")


class Typewriter:
    """
    Reveals a block of paragraphs one character per tick, with a blinking
    underscore cursor while it types. Runs as its own asyncio task; the
    animation never waits for it.

    Data Contract:
    - Inputs:
        - paragraphs (list[str]): Paragraph text; '\n' inside a paragraph breaks the line.
        - speed (int): Milliseconds per revealed character.
        - rect (tuple): (x, y, w, h) area the text is drawn into.
    - Invariants: progress never exceeds the length of the text.
    """
    def __init__(self, paragraphs, speed: int = 75, rect=(40, 40, 420, 600), font_size: int = 22,
                 color=constants.TEXT_COLOR):
        self.text = "\n\n".join(paragraphs)
        self.speed = speed
        self.rect = pygame.Rect(rect)
        self.font_size = font_size
        self.color = color
        self.progress = 0
        self.visible = False
        self._task = None
        self._font = None

    @property
    def done(self) -> bool:
        return self.progress >= len(self.text)

    def visible_text(self) -> str:
        if not self.visible:
            return ""
        if self.done:
            return self.text
        cursor = "_" if self.progress & 1 else ""
        return self.text[:self.progress] + cursor

    def step(self):
        if not self.done:
            self.progress += 1

    def start(self):
        """Schedules the reveal on the running event loop and returns at once."""
        self.visible = True
        logger.info(f"Text reveal started ({len(self.text)} characters at {self.speed} ms each).")
        self._task = asyncio.ensure_future(self.run())
        return self._task

    async def run(self):
        while not self.done:
            self.step()
            await asyncio.sleep(self.speed / 1000)
        logger.info("Text reveal finished.")

    def wrap(self, font, text):
        """Splits text into lines that fit the reveal rectangle."""
        lines = []
        for paragraph in text.split("\n"):
            line = ""
            for word in paragraph.split(" "):
                candidate = f"{line} {word}" if line else word
                if line and font.size(candidate)[0] > self.rect.width:
                    lines.append(line)
                    line = word
                else:
                    line = candidate
            lines.append(line)
        return lines

    def draw(self, surface: pygame.Surface):
        text = self.visible_text()
        if not text:
            return
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self.font_size)
        line_height = self._font.get_linesize()
        # Keep the newest lines in view, like a box scrolled to the bottom.
        max_lines = max(1, self.rect.height // line_height)
        y = self.rect.y
        for line in self.wrap(self._font, text)[-max_lines:]:
            if line:
                surface.blit(self._font.render(line, True, self.color), (self.rect.x, y))
            y += line_height
