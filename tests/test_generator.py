"""
Generator 單元測試：四種輸出格式、空分類、冪等與 effect 不對稱行為。
"""
import json

import pytest

from figma_token_sync.generator import (
    FORMATS,
    build_dtcg_document,
    build_tailwind_theme,
    render,
    to_css_variables,
    to_json,
    to_scss,
    to_tailwind_config,
)
from figma_token_sync.tokens import (
    ColorToken,
    EffectToken,
    EffectValue,
    SpacingToken,
    TokenMetadata,
    TokenSet,
    TypographyToken,
)

META = TokenMetadata(last_synced="2024-05-01T12:00:00Z", file_key="FILE123", file_name="Design System")


def make_tokens(**overrides):
    data = dict(
        metadata=META,
        colors={
            "primary": ColorToken(key="primary", name="Primary", value="#ff0000", opacity=0.5, description="Brand"),
            "surface": ColorToken(key="surface", name="Surface", value="#ffffff", opacity=1),
        },
        typography={
            "heading": TypographyToken(
                key="heading", name="Heading", font_family="Inter", font_size=32.0, font_weight=700,
                line_height=40.0, letter_spacing=-0.5, text_case="uppercase",
            ),
            "body": TypographyToken(
                key="body", name="Body", font_family="Inter", font_size=16, font_weight=400,
                line_height="normal", letter_spacing=0,
            ),
        },
        spacing={
            "sm": SpacingToken(key="sm", name="SM", value=8),
        },
        effects={
            "card": EffectToken(
                key="card", name="Card", kind="shadow",
                value=EffectValue(color="rgba(0, 0, 0, 0.25)", offset_x=0, offset_y=4, blur=8, spread=0),
            ),
            "frosted": EffectToken(key="frosted", name="Frosted", kind="blur", value=EffectValue(blur=12)),
        },
    )
    data.update(overrides)
    return TokenSet(**data)


EMPTY = TokenSet(metadata=META)


# ─── 共通行為 ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize("fmt", list(FORMATS))
def test_idempotent(fmt):
    tokens = make_tokens()
    assert render(fmt, tokens) == render(fmt, tokens)


@pytest.mark.parametrize("fmt", ["css", "tailwind", "scss"])
def test_header_has_timestamp_source_and_notice(fmt):
    out = render(fmt, make_tokens())
    head = "\n".join(out.splitlines()[:6])
    assert "2024-05-01T12:00:00Z" in head
    assert "FILE123" in head
    assert "DO NOT EDIT MANUALLY" in head


@pytest.mark.parametrize("fmt", list(FORMATS))
def test_output_ends_with_single_newline(fmt):
    out = render(fmt, make_tokens())
    assert out.endswith("\n") and not out.endswith("\n\n")


def test_render_unknown_format():
    with pytest.raises(ValueError):
        render("less", make_tokens())


# ─── CSS ────────────────────────────────────────────────────────────────────

class TestCSS:
    def test_values(self):
        css = to_css_variables(make_tokens())
        assert "  --color-primary: #ff0000;" in css
        assert "  --color-primary-opacity: 0.5;" in css
        assert "--color-surface-opacity" not in css
        assert '  --font-heading-family: "Inter";' in css
        assert "  --font-heading-size: 32px;" in css
        assert "  --font-heading-weight: 700;" in css
        assert "  --font-heading-line-height: 40px;" in css
        assert "  --font-heading-letter-spacing: -0.5px;" in css
        assert "  --font-heading-text-transform: uppercase;" in css
        assert "  --font-body-line-height: normal;" in css
        assert "  --spacing-sm: 8px;" in css
        assert "  --shadow-card: 0px 4px 8px 0px rgba(0, 0, 0, 0.25);" in css
        assert "  --blur-frosted: 12px;" in css

    def test_dark_mode_placeholder(self):
        css = to_css_variables(make_tokens())
        assert '[data-theme="dark"] {' in css
        assert css.rstrip().endswith("}")

    def test_empty_sections_omitted(self):
        css = to_css_variables(EMPTY)
        assert "/* Colors */" not in css
        assert "/* Spacing */" not in css
        assert ":root {\n}" in css


# ─── Tailwind ───────────────────────────────────────────────────────────────

class TestTailwind:
    def test_theme_structure(self):
        extend = build_tailwind_theme(make_tokens())["theme"]["extend"]
        assert extend["colors"] == {"primary": "#ff0000", "surface": "#ffffff"}
        assert extend["fontFamily"] == {"inter": ["Inter"]}
        assert extend["fontSize"]["heading"] == ["32px", {"lineHeight": "40px"}]
        assert extend["fontSize"]["body"] == ["16px", {"lineHeight": "normal"}]
        assert extend["spacing"] == {"sm": "8px"}
        assert extend["boxShadow"] == {"card": "0px 4px 8px 0px rgba(0, 0, 0, 0.25)"}
        assert extend["blur"] == {"frosted": "12px"}

    def test_module_export_parses_as_json(self):
        out = to_tailwind_config(make_tokens())
        assert "module.exports = " in out
        literal = out.split("module.exports = ", 1)[1].rstrip().rstrip(";")
        assert json.loads(literal) == build_tailwind_theme(make_tokens())

    def test_empty_maps_omitted(self):
        assert build_tailwind_theme(EMPTY) == {"theme": {"extend": {}}}


# ─── DTCG JSON ──────────────────────────────────────────────────────────────

class TestJSON:
    def test_metadata(self):
        doc = json.loads(to_json(make_tokens()))
        assert doc["$schema"].startswith("https://design-tokens.github.io")
        assert doc["$metadata"]["generator"] == "figma-token-sync"
        assert doc["$metadata"]["lastSynced"] == "2024-05-01T12:00:00Z"
        assert doc["$metadata"]["source"] == {"type": "figma", "fileKey": "FILE123", "fileName": "Design System"}

    def test_tokens(self):
        doc = build_dtcg_document(make_tokens())
        assert doc["color"]["primary"] == {"$type": "color", "$value": "#ff0000", "$description": "Brand"}
        assert doc["color"]["surface"]["$description"] == "Surface"
        heading = doc["typography"]["heading"]["$value"]
        assert heading == {
            "fontFamily": "Inter", "fontSize": "32px", "fontWeight": 700,
            "lineHeight": "40px", "letterSpacing": "-0.5px", "textCase": "uppercase",
        }
        assert doc["spacing"]["sm"] == {"$type": "dimension", "$value": "8px", "$description": "SM"}
        assert doc["effect"]["card"]["$value"]["offsetY"] == "4px"

    def test_only_shadow_effects(self):
        doc = build_dtcg_document(make_tokens())
        assert "card" in doc["effect"]
        assert "frosted" not in doc["effect"]

    def test_blur_only_effects_omit_group(self):
        tokens = make_tokens(effects={
            "frosted": EffectToken(key="frosted", name="Frosted", kind="blur", value=EffectValue(blur=12)),
        })
        assert "effect" not in build_dtcg_document(tokens)

    def test_empty_categories_omitted(self):
        doc = build_dtcg_document(EMPTY)
        assert set(doc) == {"$schema", "$metadata"}


# ─── SCSS ───────────────────────────────────────────────────────────────────

class TestSCSS:
    def test_variables_and_maps(self):
        scss = to_scss(make_tokens())
        assert "$color-primary: #ff0000;" in scss
        assert '$colors: (\n  "primary": #ff0000,\n  "surface": #ffffff,\n);' in scss
        assert "$spacing-sm: 8px;" in scss
        assert '$spacing: (\n  "sm": 8px,\n);' in scss
        assert "$shadow-card: 0px 4px 8px 0px rgba(0, 0, 0, 0.25);" in scss
        assert "$blur-frosted: 12px;" in scss

    def test_typography_mixin_branch_order(self):
        scss = to_scss(make_tokens())
        assert "@mixin typography($style) {" in scss
        first = scss.index('@if $style == "heading"')
        second = scss.index('} @else if $style == "body"')
        assert first < second
        assert "    text-transform: $font-heading-text-transform;" in scss

    def test_empty_sections_omitted(self):
        scss = to_scss(EMPTY)
        assert "@mixin" not in scss
        assert "$colors" not in scss
        assert "// Effects" not in scss


# ─── effect 不對稱 ──────────────────────────────────────────────────────────

def test_blur_appears_everywhere_except_json():
    tokens = make_tokens()
    assert "frosted" in to_css_variables(tokens)
    assert "frosted" in to_tailwind_config(tokens)
    assert "frosted" in to_scss(tokens)
    assert "frosted" not in to_json(tokens)
    for fmt in FORMATS:
        assert "card" in render(fmt, tokens)


def test_glow_only_effects_omit_effect_section():
    tokens = make_tokens(effects={
        "halo": EffectToken(key="halo", name="Halo", kind="glow", value=EffectValue(blur=6)),
    })
    assert "/* Effects */" not in to_css_variables(tokens)
    assert "// Effects" not in to_scss(tokens)
