"""Captchas solved from a picture, a sound or a plain-text question.

``body`` always carries the base64-encoded media. ``img_instructions`` is an
optional base64 image with extra instructions for the worker.
"""

from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import ConfigDict, Field

from ..declaration import CaptchaTask, captcha
from ..solution import SolutionPayload


class AnswerType(IntEnum):
    """Kind of characters the answer to a ``NormalCaptcha`` may contain."""

    NO_PREFERENCE = 0
    NUMERIC = 1
    ALPHABETICAL = 2
    ALPHABETICAL_OR_NUMERICAL = 3
    ALPHANUMERICAL = 4


class AudioLanguage(str, Enum):
    ENGLISH = "en"
    PORTUGUESE = "pt"
    FRENCH = "fr"
    GERMAN = "de"
    GREEK = "el"
    RUSSIAN = "ru"


class Point(SolutionPayload):
    x: int
    y: int


class BoundingBox(SolutionPayload):
    x_min: int
    y_min: int
    x_max: int
    y_max: int


class TextSolution(SolutionPayload):
    text: str


class AudioSolution(SolutionPayload):
    solution: str


class CoordinatesSolution(SolutionPayload):
    coordinates: List[Point]


class RotateSolution(SolutionPayload):
    rotate: int


class GridSolution(SolutionPayload):
    click: List[int]


class DrawAroundSolution(SolutionPayload):
    canvas: List[List[Point]]


class BoundingBoxSolution(SolutionPayload):
    # The outer key is snake_case on the wire, the boxes themselves are camelCase
    model_config = ConfigDict(alias_generator=None)

    bounding_boxes: List[List[BoundingBox]]


@captcha(timeout=5, solution=TextSolution, task_type="ImageToTextTask")
class NormalCaptcha(CaptchaTask):
    """Distorted text in an image.

    Attributes:
        body: Base64-encoded image.
        phrase: The answer contains at least two words.
        case: The answer is case sensitive.
        numeric: Which characters the answer may contain.
        math: The worker has to do a calculation.
        min_length: Minimum length of the answer.
        max_length: Maximum length of the answer.
        comment: Instructions shown to the worker.
        img_instructions: Base64-encoded image with instructions.
    """

    body: str
    phrase: Optional[bool] = None
    case: Optional[bool] = None
    numeric: Optional[AnswerType] = None
    math: Optional[bool] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    comment: Optional[str] = None
    img_instructions: Optional[str] = None


@captcha(timeout=5, solution=TextSolution, task_type="TextCaptchaTask")
class TextCaptcha(CaptchaTask):
    """A question in plain text, answered by a worker."""

    comment: str


@captcha(timeout=5, solution=AudioSolution, task_type="AudioTask")
class AudioCaptcha(CaptchaTask):
    """Speech recognition of a base64-encoded mp3 file."""

    body: str
    language: AudioLanguage = Field(alias="lang")


@captcha(timeout=5, solution=CoordinatesSolution, task_type="CoordinatesTask")
class CoordinatesCaptcha(CaptchaTask):
    """Click on points of an image; the solution lists their coordinates."""

    body: str
    comment: Optional[str] = None
    img_instructions: Optional[str] = None


@captcha(timeout=5, solution=RotateSolution, task_type="RotateTask")
class RotateCaptcha(CaptchaTask):
    """Rotate an image until it is upright; the solution is the angle."""

    body: str
    angle: Optional[int] = Field(default=None, ge=0, le=360)
    comment: Optional[str] = None
    img_instructions: Optional[str] = None


@captcha(timeout=5, solution=GridSolution, task_type="GridTask")
class GridCaptcha(CaptchaTask):
    """Pick the tiles of a grid that match the instructions."""

    body: str
    rows: Optional[int] = Field(default=None, ge=1)
    columns: Optional[int] = Field(default=None, ge=1)
    comment: Optional[str] = None
    img_instructions: Optional[str] = None


@captcha(timeout=5, solution=DrawAroundSolution, task_type="DrawAroundTask")
class DrawAroundCaptcha(CaptchaTask):
    body: str
    comment: Optional[str] = None
    img_instructions: Optional[str] = None


@captcha(timeout=5, solution=BoundingBoxSolution, task_type="BoundingBoxTask")
class BoundingBoxCaptcha(CaptchaTask):
    body: str
    comment: Optional[str] = None
    img_instructions: Optional[str] = None
