from __future__ import annotations
import logging
import threading
import uuid
from typing import Dict, List, Optional

from ..dictionary import DEFAULT_MIN_LENGTH, DictionaryIndex
from ..schemas import GameGuessOutput
from ..scrambler import scramble

logger = logging.getLogger(__name__)

MIN_GAME_LENGTH = 3

RESULT_CREATED = 'Created new game.'
RESULT_INVALID_ID = 'Invalid Game ID.'
RESULT_NOT_FOUND = 'Game board/state not found.'
RESULT_INCORRECT = 'Guessed incorrectly.'
RESULT_CORRECT = 'Guessed correctly.'
RESULT_ALL_GUESSED = 'All words guessed.'
RESULT_STATE = 'Current game state.'


class GameValidationError(ValueError):
    """Bad length/minLength passed to GameManager.create_game."""


class GameCreationError(ValueError):
    """No dictionary word of the requested length."""


class GameLookupError(Exception):
    result = RESULT_NOT_FOUND


class InvalidGameId(GameLookupError):
    result = RESULT_INVALID_ID


class GameNotFound(GameLookupError):
    result = RESULT_NOT_FOUND


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Game:
    """One puzzle: the seed word, its scrambled form and guess progress.

    The target key set is fixed at creation; flags only go from False to True.
    All reads and writes of the flags happen under self._lock.
    """

    def __init__(self, game_id: str, original_word: str, scrambled_word: str, targets: List[str]):
        self.id = game_id
        self.original_word = original_word
        self.scrambled_word = scrambled_word
        self._targets: Dict[str, bool] = {w: False for w in targets}
        self._remaining = len(self._targets)
        self._lock = threading.Lock()

    @property
    def total(self) -> int:
        return len(self._targets)

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def status(self) -> str:
        if self._remaining == 0:
            return 'complete'
        if self._remaining == self.total:
            return 'created'
        return 'in_progress'

    def guessed_words(self) -> List[str]:
        return sorted(w for w, guessed in self._targets.items() if guessed)

    def to_output(self, result: str, guess_word: Optional[str] = None) -> GameGuessOutput:
        return GameGuessOutput(
            result=result,
            id=self.id,
            originalWord=self.original_word,
            scrambledWord=self.scrambled_word,
            guessWord=guess_word,
            totalWords=self.total,
            remainingWords=self._remaining,
            guessedWords=self.guessed_words(),
            status=self.status,  # type: ignore
        )

    def snapshot(self, result: str) -> GameGuessOutput:
        with self._lock:
            return self.to_output(result)

    def guess(self, word: Optional[str]) -> GameGuessOutput:
        if word is None or not word.strip():
            return self.snapshot(RESULT_INCORRECT)
        key = word.strip().lower()
        with self._lock:
            if key not in self._targets:
                return self.to_output(RESULT_INCORRECT, word)
            if not self._targets[key]:
                self._targets[key] = True
                self._remaining -= 1
                if self._remaining == 0:
                    logger.info("Game %s complete: all %s words guessed", self.id, self.total)
                    return self.to_output(RESULT_ALL_GUESSED, word)
            # first hit or repeat of an already guessed word
            return self.to_output(RESULT_CORRECT, word)


class GameManager:
    def __init__(self, index: DictionaryIndex):
        self.index = index
        self.games: Dict[str, Game] = {}
        # guards registry insertion only; guesses lock per game
        self._lock = threading.Lock()

    def create_game(self, length: Optional[int], min_length: Optional[int] = DEFAULT_MIN_LENGTH) -> GameGuessOutput:
        if not _is_int(length) or length < MIN_GAME_LENGTH:
            raise GameValidationError(
                f"Invalid length=[{length}], expect greater than or equals {MIN_GAME_LENGTH}"
            )
        if min_length is None:
            min_length = DEFAULT_MIN_LENGTH
        elif not _is_int(min_length) or min_length <= 0:
            raise GameValidationError(f"Invalid minLength=[{min_length}], expect positive integer")
        if min_length > length:
            raise GameValidationError(
                f"Invalid minLength=[{min_length}], expect less than or equals length=[{length}]"
            )

        original = self.index.random_word(length)
        if original is None:
            logger.warning("No word of length %s available for a new game", length)
            raise GameCreationError(f"Cannot find valid word of length=[{length}] to create game")

        game = Game(
            game_id=str(uuid.uuid4()),
            original_word=original,
            scrambled_word=scramble(original),
            targets=self.index.sub_words(original, min_length),
        )
        with self._lock:
            self.games[game.id] = game
        logger.info("Created game %s: length=%s minLength=%s targets=%s", game.id, length, min_length, game.total)
        return game.snapshot(RESULT_CREATED)

    def get(self, game_id: Optional[str]) -> Game:
        if game_id is None or not game_id.strip():
            raise InvalidGameId(game_id)
        game = self.games.get(game_id.strip())
        if game is None:
            raise GameNotFound(game_id)
        return game

    def state(self, game_id: Optional[str]) -> GameGuessOutput:
        game = self.get(game_id)
        return game.snapshot(RESULT_STATE)

    def guess(self, game_id: Optional[str], word: Optional[str]) -> GameGuessOutput:
        game = self.get(game_id)
        output = game.guess(word)
        logger.debug("Game %s guess=%r -> %s (%s remaining)", game.id, word, output.result, output.remainingWords)
        return output
