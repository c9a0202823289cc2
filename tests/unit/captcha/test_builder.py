"""Tests for the type-state builder generator."""

import random
from typing import Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from captcha_client.captcha import generate_builder, registered_captchas
from captcha_client.captcha.types import (
    AudioLanguage,
    DataDomeCaptcha,
    GeeTestV4,
    HCaptcha,
    NormalCaptcha,
    RecaptchaV2,
    RecaptchaV3,
)
from captcha_client.errors import (
    CaptchaDefinitionError,
    IncompleteBuildError,
    InvalidRequestError,
)
from captcha_client.proxy import Proxy, ProxyKind, ProxyLess, WithProxy

URL = "https://example.com/login"
IMAGE = "R0lGODlhAQABAIAAAP///wAAACH5BAEAAAAALAAAAAABAAEAAAICRAEAOw=="
PROXY = Proxy(kind=ProxyKind.HTTP, address="1.2.3.4", port=8080, login="user23", password="p4$$w0rd")

REQUIRED_VALUES = {
    "NormalCaptcha": {"body": IMAGE},
    "TextCaptcha": {"comment": "If tomorrow is Saturday, what day is today?"},
    "AudioCaptcha": {"body": "SUQzBAAAAAAAI1RTU0UAAAA", "language": AudioLanguage.ENGLISH},
    "CoordinatesCaptcha": {"body": IMAGE},
    "RotateCaptcha": {"body": IMAGE},
    "GridCaptcha": {"body": IMAGE},
    "DrawAroundCaptcha": {"body": IMAGE},
    "BoundingBoxCaptcha": {"body": IMAGE},
    "RecaptchaV2": {"website_url": URL, "website_key": "6Le-wvkSAAAAAPBMRTvw0Q4Muexq9bi0DJwx_mJ-"},
    "RecaptchaV2Enterprise": {"website_url": URL, "website_key": "6Lf26sUnAAAAAIKLuWNYgRsFUfmI-3Lex3xT5N-s"},
    "RecaptchaV3": {"website_url": URL, "website_key": "6LfB5_IbAAAAAMCtsjEHEHKqcB9iQocwwxTiihJu", "min_score": 0.3},
    "HCaptcha": {"website_url": URL, "website_key": "f7de0da3-3303-44e8-ab48-fa32ff8ccc7b"},
    "ArkoseLabsCaptcha": {"website_url": URL, "website_public_key": "69A21A01-CC7B-B9C6-0F9A-E7FA06677FFC"},
    "GeeTestV3": {"website_url": URL, "gt": "81388ea1fc187e0c335c0a8907ff2625", "challenge": "2e2f0f65240058b683cb6ea21c303eea6n"},
    "GeeTestV4": {"website_url": URL, "captcha_id": "e392e1d7fd421dc63325744d5a2b9c73"},
    "CapyCaptcha": {"website_url": URL, "website_key": "PUZZLE_Cme4hZLjuZRMYC3uh14C52D3uNms5w"},
    "KeyCaptcha": {
        "website_url": URL,
        "user_id": 184015,
        "session_id": "9ff29e0176e78eb7ba59314f92dbac1b",
        "web_server_sign": "964635241a3e5e76980f2572e5f63452",
        "web_server_sign2": "3ca802a38ffc5831fa293ac2819b1204",
    },
    "LeminCaptcha": {"website_url": URL, "captcha_id": "CROPPED_3dfdd5c_d1872b526b794d83ba3b365eb15a200b", "div_id": "lemin-cropped-captcha"},
    "AmazonCaptcha": {
        "website_url": URL,
        "website_key": "AQIDAHjcYu/GjX+QlghicBgQ/7bFaQZ+m5FKCMDnO+vTp9z",
        "iv": "CgAHbCe2GgAAAAAj",
        "context": "9BUgmlm48F92WUoqv97a49ZuEJJ50TCk9MVr3C7WMtQ0X6flVbufM4n8mjFLmbLVAPgaQ1Jydeaja94iAS49ljb",
    },
    "AtbCaptcha": {"website_url": URL, "app_id": "af25e409b33d722a95e56a230ff8771c", "api_server": "https://cap.aisecurius.com"},
    "CutCaptcha": {"website_url": URL, "misery_key": "a1488b66da00bf332a1488993a5443c79047e752", "api_key": "SAb83IIB"},
    "CyberSiARACaptcha": {"website_url": URL, "slide_master_url_id": "tH3pC_AfcMuGz", "user_agent": "Mozilla/5.0"},
    "DataDomeCaptcha": {
        "website_url": URL,
        "captcha_url": "https://geo.captcha-delivery.com/captcha/?initialCid=AHrlqAAAAAMA9UvsL58YLqIAXNLFPg%3D%3D",
        "user_agent": "Mozilla/5.0",
        "proxy": PROXY,
    },
    "FriendlyCaptcha": {"website_url": URL, "website_key": "2FZFEVS1FZCGQ9"},
    "MtCaptcha": {"website_url": URL, "website_key": "MTPublic-KzqLY1cKH"},
    "TencentCaptcha": {"website_url": URL, "app_id": "190014885"},
    "TurnstileStandalone": {"website_url": URL, "website_key": "0x4AAAAAAAChNiVJM_WtShFf"},
    "TurnstileChallengePage": {
        "website_url": URL,
        "website_key": "0x4AAAAAAADnPIDROrmt1Wwj",
        "user_agent": "Mozilla/5.0",
        "action": "managed",
        "data": "80001aa1affffc21",
        "page_data": "3gAFo2l2MbhmWkxGWElVc2tzeVZhTFl1UVNM",
    },
}


def declared_variants():
    return {
        name: cls
        for name, cls in registered_captchas().items()
        if cls.__module__.startswith("captcha_client.")
    }


def fill(builder, values):
    for field_name, value in values.items():
        builder = getattr(builder, field_name)(value)
    return builder


class TestEveryVariant:
    """Builder completeness checks over every declared variant."""

    def test_required_values_cover_every_variant(self):
        """Verifies the table below lists exactly the declared variants."""
        assert set(REQUIRED_VALUES) == set(declared_variants())

    @pytest.mark.parametrize("name", sorted(REQUIRED_VALUES))
    def test_required_fields_match(self, name):
        """Verifies a fresh builder reports exactly the required fields as missing."""
        builder = declared_variants()[name].builder()

        assert set(builder.missing_fields) == set(REQUIRED_VALUES[name])

    @pytest.mark.parametrize("name", sorted(REQUIRED_VALUES))
    def test_complete_builder_builds(self, name):
        """Verifies a builder with every required field set exposes build()."""
        variant = declared_variants()[name]
        values = REQUIRED_VALUES[name]
        order = list(values)
        random.Random(name).shuffle(order)

        builder = fill(variant.builder(), {key: values[key] for key in order})

        assert hasattr(builder, "build")
        assert builder.missing_fields == ()
        assert isinstance(builder.build(), variant)

    @pytest.mark.parametrize("name", sorted(REQUIRED_VALUES))
    def test_missing_any_single_field_hides_build(self, name):
        """Verifies leaving out any one required field hides build()."""
        variant = declared_variants()[name]
        values = REQUIRED_VALUES[name]

        for left_out in values:
            builder = fill(
                variant.builder(),
                {key: value for key, value in values.items() if key != left_out},
            )

            assert not hasattr(builder, "build")
            with pytest.raises(IncompleteBuildError) as exc_info:
                builder.build()
            assert exc_info.value.missing == (left_out,)

    @pytest.mark.parametrize("name", sorted(REQUIRED_VALUES))
    def test_resetting_a_field_keeps_the_state(self, name):
        """Verifies setting a provided field again keeps the builder's class."""
        variant = declared_variants()[name]
        values = REQUIRED_VALUES[name]
        first = next(iter(values))

        builder = fill(variant.builder(), values)
        again = getattr(builder, first)(values[first])

        assert type(again) is type(builder)
        assert isinstance(again.build(), variant)


class TestTypeState:
    """Tests for the per-state class family."""

    def test_root_is_all_missing(self):
        builder = RecaptchaV2.builder()

        assert type(builder).__name__ == "RecaptchaV2Builder"
        assert builder.missing_fields == ("website_url", "website_key")
        assert isinstance(builder._slots["website_url"], type(builder).MissingWebsiteUrl)

    def test_states_are_subclasses_of_the_root(self):
        root = RecaptchaV2.builder()
        partial = root.website_url(URL)

        assert type(partial) is not type(root)
        assert isinstance(partial, type(root))
        assert "WebsiteUrlProvided" in type(partial).__name__
        assert "MissingWebsiteKey" in type(partial).__name__

    def test_states_are_cached(self):
        """Verifies the same combination of provided fields reuses one class."""
        one = RecaptchaV2.builder().website_url(URL).website_key("a")
        other = RecaptchaV2.builder().website_key("b").website_url("https://example.org")

        assert type(one) is type(other)

    def test_provided_slot_wraps_the_value(self):
        builder = RecaptchaV2.builder().website_key("site-key")
        root = type(RecaptchaV2.builder())

        slot = builder._slots["website_key"]
        assert isinstance(slot, root.WebsiteKeyProvided)
        assert slot.value == "site-key"

    def test_last_value_wins(self):
        task = (
            RecaptchaV2.builder()
            .website_key("first")
            .website_url(URL)
            .website_key("second")
            .build()
        )

        assert task.website_key == "second"

    def test_markers_are_scoped_per_variant(self):
        """Verifies two variants with the same field never share marker classes."""
        recaptcha = type(RecaptchaV2.builder())
        hcaptcha = type(HCaptcha.builder())

        assert recaptcha.MissingWebsiteUrl is not hcaptcha.MissingWebsiteUrl
        assert recaptcha.WebsiteUrlProvided is not hcaptcha.WebsiteUrlProvided
        assert recaptcha.MissingWebsiteUrl.__qualname__ == "RecaptchaV2Builder.MissingWebsiteUrl"

    def test_intermediate_state_cannot_be_instantiated(self):
        partial_state = type(RecaptchaV2.builder().website_url(URL))

        with pytest.raises(TypeError):
            partial_state()

    def test_builders_are_immutable(self):
        builder = RecaptchaV2.builder()
        updated = builder.website_url(URL)

        assert builder.missing_fields == ("website_url", "website_key")
        assert updated is not builder
        with pytest.raises(AttributeError):
            builder.website_key = "x"

    def test_unknown_attribute_is_a_plain_attribute_error(self):
        with pytest.raises(AttributeError) as exc_info:
            RecaptchaV2.builder().not_a_field

        assert not isinstance(exc_info.value, IncompleteBuildError)


class TestOptionalSlots:
    """Tests for optional setters, removers and the proxy axis."""

    def test_optional_setter_keeps_the_class(self):
        builder = RecaptchaV2.builder().website_url(URL)

        updated = builder.user_agent("Mozilla/5.0")

        assert type(updated) is type(builder)
        assert updated.website_key("k").build().user_agent == "Mozilla/5.0"

    def test_remover_clears_the_value(self):
        builder = NormalCaptcha.builder().body(IMAGE).comment("type the red letters")

        cleared = builder.remove_comment()

        assert type(cleared) is type(builder)
        assert cleared.build().comment is None
        assert builder.build().comment == "type the red letters"

    def test_optional_fields_can_be_set_before_required_ones(self):
        task = NormalCaptcha.builder().min_length(4).max_length(8).body(IMAGE).build()

        assert (task.min_length, task.max_length) == (4, 8)

    def test_proxy_defaults_to_proxyless(self):
        task = fill(RecaptchaV2.builder(), REQUIRED_VALUES["RecaptchaV2"]).build()

        assert isinstance(task.proxy, ProxyLess)
        assert task.task_type == "RecaptchaV2TaskProxyless"

    def test_proxy_setter_wraps_the_proxy(self):
        task = fill(RecaptchaV2.builder(), REQUIRED_VALUES["RecaptchaV2"]).proxy(PROXY).build()

        assert task.proxy == WithProxy(proxy=PROXY)
        assert task.task_type == "RecaptchaV2Task"

    def test_proxy_remover_restores_proxyless(self):
        builder = fill(RecaptchaV2.builder(), REQUIRED_VALUES["RecaptchaV2"]).proxy(PROXY)

        task = builder.remove_proxy().build()

        assert isinstance(task.proxy, ProxyLess)

    def test_proxy_setter_rejects_other_values(self):
        with pytest.raises(InvalidRequestError):
            RecaptchaV2.builder().proxy("http://1.2.3.4:8080")

    def test_required_proxy_is_part_of_the_type_state(self):
        builder = DataDomeCaptcha.builder()

        assert "proxy" in builder.missing_fields
        assert hasattr(type(builder), "MissingProxy")

    def test_extensible_payload_is_optional(self):
        task = fill(GeeTestV4.builder(), REQUIRED_VALUES["GeeTestV4"]).build()

        assert task.init_parameters is None


class TestBuild:
    """Tests for validation during build()."""

    def test_invalid_value_raises_invalid_request(self):
        builder = RecaptchaV2.builder().website_url("not a url").website_key("k")

        with pytest.raises(InvalidRequestError) as exc_info:
            builder.build()

        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_out_of_range_value_raises_invalid_request(self):
        builder = fill(RecaptchaV3.builder(), dict(REQUIRED_VALUES["RecaptchaV3"], min_score=2))

        with pytest.raises(InvalidRequestError):
            builder.build()

    def test_incomplete_build_error_names_the_target(self):
        with pytest.raises(IncompleteBuildError) as exc_info:
            RecaptchaV2.builder().build()

        assert exc_info.value.target == "RecaptchaV2"
        assert exc_info.value.missing == ("website_url", "website_key")
        assert "website_url, website_key" in str(exc_info.value)


class Settings(BaseModel):
    host: str
    port: int = 8080
    user: Optional[str] = None


class AllOptional(BaseModel):
    name: Optional[str] = None
    retries: int = 3


class NullableWithoutDefault(BaseModel):
    host: str
    note: Optional[str]


class TestGenerateBuilder:
    """Tests for generate_builder() on arbitrary models."""

    def test_default_name(self):
        assert generate_builder(Settings).__name__ == "SettingsBuilder"

    def test_custom_name_and_constructor(self):
        builder_class = generate_builder(
            Settings,
            name="ConnectionBuilder",
            construct=lambda **values: ("built", values),
        )

        result = builder_class().host("db").port(5432).build()

        assert builder_class.__name__ == "ConnectionBuilder"
        assert result == ("built", {"host": "db", "port": 5432})

    def test_zero_required_fields_builds_immediately(self):
        builder = generate_builder(AllOptional)()

        assert hasattr(builder, "build")
        assert builder.build() == AllOptional()

    def test_nullable_field_without_default_is_optional(self):
        builder = generate_builder(NullableWithoutDefault)()

        assert builder.missing_fields == ("host",)
        assert builder.host("db").build() == NullableWithoutDefault(host="db", note=None)
        assert builder.host("db").note("primary").remove_note().build().note is None

    def test_field_named_build_is_rejected(self):
        class Job(BaseModel):
            build: str = Field(default="latest")

        with pytest.raises(CaptchaDefinitionError):
            generate_builder(Job)

    def test_field_clashing_with_a_remover_is_rejected(self):
        class Clashing(BaseModel):
            token: Optional[str] = None
            remove_token: bool = False

        with pytest.raises(CaptchaDefinitionError):
            generate_builder(Clashing)
