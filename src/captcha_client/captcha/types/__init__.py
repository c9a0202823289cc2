"""Every task variant the solving service accepts."""

from .arkose_labs import ArkoseLabsCaptcha
from .geetest import GeeTestV3, GeeTestV3Solution, GeeTestV4, GeeTestV4Solution
from .hcaptcha import HCaptcha, HCaptchaSolution
from .image import (
    AnswerType,
    AudioCaptcha,
    AudioLanguage,
    AudioSolution,
    BoundingBox,
    BoundingBoxCaptcha,
    BoundingBoxSolution,
    CoordinatesCaptcha,
    CoordinatesSolution,
    DrawAroundCaptcha,
    DrawAroundSolution,
    GridCaptcha,
    GridSolution,
    NormalCaptcha,
    Point,
    RotateCaptcha,
    RotateSolution,
    TextCaptcha,
    TextSolution,
)
from .recaptcha import RecaptchaSolution, RecaptchaV2, RecaptchaV2Enterprise, RecaptchaV3
from .turnstile import TurnstileChallengePage, TurnstileSolution, TurnstileStandalone
from .widgets import (
    AmazonCaptcha,
    AmazonSolution,
    AtbCaptcha,
    CapyCaptcha,
    CapySolution,
    CutCaptcha,
    CyberSiARACaptcha,
    DataDomeCaptcha,
    DataDomeSolution,
    FriendlyCaptcha,
    KeyCaptcha,
    LeminCaptcha,
    LeminSolution,
    MtCaptcha,
    TencentCaptcha,
    TencentSolution,
)

__all__ = [
    "AmazonCaptcha",
    "AmazonSolution",
    "AnswerType",
    "ArkoseLabsCaptcha",
    "AtbCaptcha",
    "AudioCaptcha",
    "AudioLanguage",
    "AudioSolution",
    "BoundingBox",
    "BoundingBoxCaptcha",
    "BoundingBoxSolution",
    "CapyCaptcha",
    "CapySolution",
    "CoordinatesCaptcha",
    "CoordinatesSolution",
    "CutCaptcha",
    "CyberSiARACaptcha",
    "DataDomeCaptcha",
    "DataDomeSolution",
    "DrawAroundCaptcha",
    "DrawAroundSolution",
    "FriendlyCaptcha",
    "GeeTestV3",
    "GeeTestV3Solution",
    "GeeTestV4",
    "GeeTestV4Solution",
    "GridCaptcha",
    "GridSolution",
    "HCaptcha",
    "HCaptchaSolution",
    "KeyCaptcha",
    "LeminCaptcha",
    "LeminSolution",
    "MtCaptcha",
    "NormalCaptcha",
    "Point",
    "RecaptchaSolution",
    "RecaptchaV2",
    "RecaptchaV2Enterprise",
    "RecaptchaV3",
    "RotateCaptcha",
    "RotateSolution",
    "TencentCaptcha",
    "TencentSolution",
    "TextCaptcha",
    "TextSolution",
    "TurnstileChallengePage",
    "TurnstileSolution",
    "TurnstileStandalone",
]
