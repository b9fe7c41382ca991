from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional

GameStatus = Literal['created', 'in_progress', 'complete']

class GameNewInput(BaseModel):
    length: Optional[int] = None
    minLength: Optional[int] = None

class GameGuessInput(BaseModel):
    id: Optional[str] = None
    word: Optional[str] = None

class GameGuessOutput(BaseModel):
    result: str
    id: Optional[str] = None
    originalWord: Optional[str] = None
    scrambledWord: Optional[str] = None
    guessWord: Optional[str] = None
    totalWords: int = 0
    remainingWords: int = 0
    guessedWords: List[str] = []
    status: Optional[GameStatus] = None

class ExistsOutput(BaseModel):
    word: str
    exists: bool

class PrefixOutput(BaseModel):
    prefix: str
    words: List[str]

class WordsOutput(BaseModel):
    words: List[str]

class SubWordsOutput(BaseModel):
    word: str
    minLength: Optional[int] = None
    words: List[str]

class RandomWordOutput(BaseModel):
    word: Optional[str] = None

class ScrambleInput(BaseModel):
    word: str = Field(..., min_length=3, max_length=30)

    @field_validator('word', mode='before')
    @classmethod
    def strip_word(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

class ScrambleOutput(BaseModel):
    word: str
    scrambledWord: str
