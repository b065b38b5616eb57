# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for canvas.py and graphics.py."""

import logging

import pytest
from conftest import open_pdf, page_operations

from pdfcanvas import (
    BuiltinFont,
    CapStyle,
    Color,
    ContentStreamBuilder,
    Document,
    JoinStyle,
    Matrix,
)
from pdfcanvas.exceptions import (
    DocumentFinalizedError,
    TextStateError,
    UnbalancedGraphicsStateError,
)


def content(document: Document, index: int = 0) -> bytes:
    """Finalizes the document and returns a page's content stream."""
    pdf = open_pdf(document.to_bytes())
    return pdf.pages[index].Contents.read_bytes()


def operators(document: Document, index: int = 0) -> list[str]:
    return [op for _, op in page_operations(document.to_bytes(), index)]


@pytest.fixture
def page(document):
    return document.add_page(612, 792)


@pytest.fixture
def kerned_page(kerned_document):
    return kerned_document.add_page(612, 792)


# ===================================================================
# ContentStreamBuilder
# ===================================================================


class TestContentStreamBuilder:
    """Operator syntax produced by the builder."""

    def test_path(self):
        cs = ContentStreamBuilder().move_to(1, 2.5).line_to(3, 4).stroke()
        assert cs.build() == b"1 2.5 m\n3 4 l\nS\n"

    def test_rectangle_and_curve(self):
        cs = ContentStreamBuilder()
        cs.append_rectangle(0, 0, 10, 20).curve_to(1, 2, 3, 4, 5, 6).close_path()
        assert cs.build() == b"0 0 10 20 re\n1 2 3 4 5 6 c\nh\n"

    def test_string_operands_are_escaped(self):
        """Byte strings are written as escaped literals."""
        cs = ContentStreamBuilder().show_text(b"a(b")
        assert cs.build() == b"(a\\(b) Tj\n"

    def test_adjusted_text(self):
        cs = ContentStreamBuilder().show_text_with_kerning(b"A", 70, b"V")
        assert cs.build() == b"[(A) 70 (V)] TJ\n"

    def test_font_operand_is_name(self):
        cs = ContentStreamBuilder().set_text_font("F1", 12)
        assert cs.build() == b"/F1 12 Tf\n"

    def test_matrix(self):
        cs = ContentStreamBuilder().cm(Matrix(1, 0, 0, 1, 10, 20))
        assert cs.build() == b"1 0 0 1 10 20 cm\n"

    def test_dashes(self):
        cs = ContentStreamBuilder().set_dashes([3, 1], 0).set_dashes()
        assert cs.build() == b"[3 1] 0 d\n[] 0 d\n"

    def test_colors(self):
        """RGB colors use RG/rg, gray levels G/g."""
        cs = ContentStreamBuilder()
        cs.set_stroke_color(Color.rgb(255, 0, 0))
        cs.set_fill_color(Color.gray(0))
        cs.set_fill_color(Color.from_floats(0, 0.5, 1))
        assert cs.build() == b"1 0 0 RG\n0 g\n0 0.5 1 rg\n"

    def test_line_styles(self):
        cs = ContentStreamBuilder()
        cs.set_line_cap(CapStyle.ROUND).set_line_join(JoinStyle.BEVEL)
        assert cs.build() == b"1 J\n2 j\n"

    def test_extend(self):
        a = ContentStreamBuilder().push()
        b = ContentStreamBuilder().pop()
        assert a.extend(b).extend(b"n").build() == b"q\nQ\nn\n"


class TestColor:
    def test_rgb_range(self):
        """Channels are 0-255."""
        assert Color.rgb(255, 255, 255).components == (1, 1, 1)
        with pytest.raises(ValueError):
            Color.rgb(256, 0, 0)

    def test_components(self):
        with pytest.raises(ValueError):
            Color.from_floats(0.5, 0.5)
        with pytest.raises(ValueError):
            Color.from_floats(1.5)

    def test_gray(self):
        assert Color.gray(255).is_gray
        assert not Color.rgb(0, 0, 0).is_gray


# ===================================================================
# Graphics state stack
# ===================================================================


class TestStateStack:
    """Save/restore of the graphics state."""

    def test_scoped_line_width(self, document, page):
        """A line width set inside a scope does not leak out of it."""
        canvas = page.canvas
        with canvas.save_state():
            canvas.set_line_width(2.0)
            assert canvas.state.line_width == 2.0
            canvas.rectangle(10, 10, 100, 50).stroke()
        assert canvas.state.line_width == 1
        canvas.rectangle(10, 100, 100, 50).stroke()

        ops = page_operations(document.to_bytes())
        assert [op for _, op in ops] == ["q", "w", "re", "S", "Q", "re", "S"]
        assert ops[1][0] == [2]

    def test_restored_on_exception(self, document, page):
        """save_state pops even when the body raises."""
        canvas = page.canvas
        with pytest.raises(RuntimeError):
            with canvas.save_state():
                canvas.set_line_width(5)
                raise RuntimeError("boom")
        assert canvas.depth == 1
        assert canvas.state.line_width == 1
        assert operators(document) == ["q", "w", "Q"]

    def test_exception_inside_text_object(self, document, page):
        """A text object open when the body raises is ended before Q."""
        canvas = page.canvas
        with pytest.raises(RuntimeError):
            with canvas.save_state():
                text = canvas.begin_text()
                text.set_font(BuiltinFont.HELVETICA, 12)
                text.show("x")
                raise RuntimeError("boom")
        assert canvas.depth == 1
        assert not canvas.in_text
        assert operators(document) == ["q", "BT", "Tf", "Tj", "ET", "Q"]
        assert document.is_finalized

    def test_text_left_open_is_ended(self, document, page, caplog):
        """Leaving a scope with an open text object ends it and warns."""
        canvas = page.canvas
        with caplog.at_level(logging.WARNING, logger="pdfcanvas"):
            with canvas.save_state():
                canvas.begin_text().set_font(BuiltinFont.COURIER, 10)
        assert not canvas.in_text
        assert canvas.depth == 1
        assert "Text object left open" in caplog.text
        assert operators(document) == ["q", "BT", "Tf", "ET", "Q"]

    def test_extra_pushes_are_unwound(self, document, page):
        """States pushed inside the scope and never popped are popped on exit."""
        canvas = page.canvas
        with canvas.save_state():
            canvas.push().push()
        assert canvas.depth == 1
        assert operators(document) == ["q", "q", "q", "Q", "Q", "Q"]

    def test_nested_scopes(self, page):
        canvas = page.canvas
        with canvas.save_state():
            canvas.set_stroke_color(Color.rgb(255, 0, 0))
            with canvas.save_state():
                assert canvas.depth == 3
                canvas.set_stroke_color(Color.gray(128))
            assert canvas.state.stroke_color == Color.rgb(255, 0, 0)
        assert canvas.state.stroke_color == Color.gray(0)

    def test_pop_at_base(self, page):
        """The base state cannot be popped."""
        with pytest.raises(UnbalancedGraphicsStateError):
            page.canvas.pop()
        assert page.canvas.depth == 1

    def test_push_pop(self, document, page):
        page.canvas.push().set_line_width(3).pop()
        assert page.canvas.state.line_width == 1
        assert operators(document) == ["q", "w", "Q"]

    def test_unbalanced_finalize(self, document, page):
        """Finalizing with an open scope fails and can be recovered."""
        page.canvas.push()
        with pytest.raises(UnbalancedGraphicsStateError, match="1 unrestored"):
            document.finalize()
        assert not document.is_finalized
        page.canvas.pop()
        document.finalize()
        assert document.is_finalized

    def test_unbalanced_second_page(self, document):
        """No page is closed when any page is unbalanced."""
        first = document.add_page(100, 100)
        second = document.add_page(100, 100)
        second.canvas.push()
        with pytest.raises(UnbalancedGraphicsStateError):
            document.finalize()
        first.canvas.rectangle(0, 0, 1, 1)
        second.canvas.pop()
        assert document.finalize().object_count == 6

    def test_concat(self, document, page):
        """Matrices compose with the current transformation."""
        canvas = page.canvas
        canvas.concat((1, 0, 0, 1, 10, 20))
        canvas.concat(Matrix(2, 0, 0, 2, 0, 0))
        assert canvas.state.ctm.shorthand == pytest.approx((2, 0, 0, 2, 10, 20))
        ops = page_operations(document.to_bytes())
        assert [op for _, op in ops] == ["cm", "cm"]
        assert [float(v) for v in ops[0][0]] == [1, 0, 0, 1, 10, 20]

    def test_scoped_matrix(self, document, page):
        """save_state(cm=...) emits q cm ... Q and restores the matrix."""
        canvas = page.canvas
        with canvas.save_state(cm=Matrix(1, 0, 0, 1, 5, 5)):
            assert canvas.state.ctm.shorthand == pytest.approx((1, 0, 0, 1, 5, 5))
        assert canvas.state.ctm.shorthand == pytest.approx((1, 0, 0, 1, 0, 0))
        assert operators(document) == ["q", "cm", "Q"]

    def test_line_styles(self, page):
        canvas = page.canvas
        canvas.set_line_cap_style(CapStyle.ROUND)
        canvas.set_line_join_style(JoinStyle.BEVEL)
        canvas.set_dash([3, 2], 1)
        assert canvas.state.cap_style is CapStyle.ROUND
        assert canvas.state.join_style is JoinStyle.BEVEL
        assert canvas.state.dash_array == (3, 2)
        assert canvas.state.dash_phase == 1

    def test_invalid_values(self, page):
        with pytest.raises(ValueError):
            page.canvas.set_line_width(-1)
        with pytest.raises(ValueError):
            page.canvas.set_dash([0, 0])
        with pytest.raises(ValueError):
            page.canvas.set_dash([1, -1])


# ===================================================================
# Paths
# ===================================================================


class TestPaths:
    def test_line(self, document, page):
        page.canvas.line(0, 0, 100, 100).stroke()
        assert content(document) == b"0 0 m\n100 100 l\nS\n"

    def test_circle(self, document, page):
        """A circle is one moveto and four curves back to the start."""
        page.canvas.circle(100, 100, 50).fill()
        ops = page_operations(document.to_bytes())
        assert [op for _, op in ops] == ["m", "c", "c", "c", "c", "f"]
        start = [float(v) for v in ops[0][0]]
        assert start == [100, 50]
        assert [float(v) for v in ops[4][0][4:]] == start
        for operands, op in ops[1:5]:
            x, y = (float(v) for v in operands[4:])
            assert (x - 100) ** 2 + (y - 100) ** 2 == pytest.approx(50**2)

    def test_clip_without_painting(self, document, page):
        page.canvas.rectangle(0, 0, 50, 50).clip().end_path()
        assert content(document) == b"0 0 50 50 re\nW\nn\n"

    @pytest.mark.parametrize(
        ("method", "operator"),
        [
            ("stroke", "S"),
            ("close_and_stroke", "s"),
            ("fill", "f"),
            ("fill_and_stroke", "B"),
            ("close_fill_and_stroke", "b"),
            ("close_path", "h"),
        ],
    )
    def test_painting_operators(self, document, page, method, operator):
        getattr(page.canvas, method)()
        assert operators(document) == [operator]

    def test_drawing_after_finalize(self, document, page):
        """A finalized page rejects drawing."""
        document.finalize()
        with pytest.raises(DocumentFinalizedError):
            page.canvas.move_to(0, 0)
        with pytest.raises(DocumentFinalizedError):
            page.canvas.set_fill_color(Color.gray(0))


# ===================================================================
# Text objects
# ===================================================================


class TestTextObjects:
    """BT/ET nesting and text state errors."""

    def test_begin_end(self, document, page):
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.HELVETICA, 12)
        assert operators(document) == ["BT", "Tf", "ET"]
        assert not page.canvas.in_text

    def test_no_nesting(self, page):
        with page.canvas.text():
            with pytest.raises(TextStateError, match="nested"):
                page.canvas.begin_text()

    def test_end_without_begin(self, page):
        with pytest.raises(TextStateError):
            page.canvas.end_text()

    def test_graphics_operator_inside_text(self, page):
        """Path operators are rejected between BT and ET."""
        with page.canvas.text():
            with pytest.raises(TextStateError):
                page.canvas.move_to(0, 0)
            with pytest.raises(TextStateError):
                page.canvas.push()

    def test_show_without_font(self, page):
        with page.canvas.text() as t:
            with pytest.raises(TextStateError, match="No font"):
                t.show("text")

    def test_ended_text_object(self, page):
        with page.canvas.text() as t:
            pass
        with pytest.raises(TextStateError):
            t.show("late")

    def test_open_text_at_finalize(self, document, page):
        page.canvas.begin_text()
        with pytest.raises(UnbalancedGraphicsStateError, match="text object"):
            document.finalize()
        page.canvas.end_text()
        document.finalize()

    def test_text_state_outlives_text_object(self, document, page):
        """The font stays selected after ET, like in the PDF graphics state."""
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.COURIER, 10)
        with page.canvas.text() as t:
            t.show("again")
        assert operators(document) == ["BT", "Tf", "ET", "BT", "Tj", "ET"]

    def test_font_from_other_document(self, page, metrics_cache):
        other = Document(metrics_cache=metrics_cache)
        font = other.get_font(BuiltinFont.HELVETICA)
        with page.canvas.text() as t:
            with pytest.raises(ValueError, match="does not belong"):
                t.set_font(font, 12)

    def test_text_colors(self, document, page):
        """Colors may be changed inside a text object."""
        with page.canvas.text() as t:
            t.set_fill_color(Color.rgb(0, 0, 255)).set_stroke_color(Color.gray(0))
        assert operators(document) == ["BT", "rg", "G", "ET"]


class TestShowText:
    """Showing strings and tracking the text position."""

    def test_escaped_string(self, document, page):
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.HELVETICA, 12)
            t.pos(50, 700)
            t.show("A(B)")
        assert b"(A\\(B\\)) Tj" in content(document)

    def test_position_advances(self, page):
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.HELVETICA, 12)
            t.pos(50, 700)
            t.show("Hello World")
            assert t.position == pytest.approx((112.004, 700))

    def test_show_does_not_kern(self, document, kerned_page):
        """Tj shows the string as is; the position ignores kerning."""
        with kerned_page.canvas.text() as t:
            t.set_font(BuiltinFont.HELVETICA, 10)
            t.show("AV")
            assert t.position == pytest.approx((11.0, 0))

    def test_pos_is_relative_to_line_start(self, page):
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.COURIER, 10)
            t.pos(10, 100)
            t.show("abc")
            t.pos(0, -12)
            assert t.position == (10, 88)

    def test_show_line(self, document, page):
        """show_line moves down by the leading."""
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.COURIER, 10)
            t.set_leading(14)
            t.pos(50, 700)
            t.show("one")
            t.show_line("two")
            assert t.position == pytest.approx((68, 686))
        assert operators(document) == ["BT", "Tf", "TL", "Td", "Tj", "'", "ET"]

    def test_spacing(self, page):
        """Character and word spacing add to the advance."""
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.COURIER, 10)
            t.set_char_spacing(1)
            t.set_word_spacing(2)
            t.show("A A")
            assert t.position == pytest.approx((18 + 3 + 2, 0))

    def test_rise(self, document, page):
        with page.canvas.text() as t:
            t.set_rise(3)
        assert b"3 Ts" in content(document)

    def test_unmappable_characters_recorded(self, document, page):
        """Replaced characters are collected in the document warnings."""
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.HELVETICA, 12)
            t.show("a☃")
        assert b"(a?) Tj" in content(document)
        assert len(document.warnings) == 1
        assert "☃" in document.warnings[0]

    def test_symbol_font(self, document, page):
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.SYMBOL, 12)
            t.show("αβ")
        assert b"(ab) Tj" in content(document)


class TestShowAdjusted:
    """TJ with client offsets and font kerning."""

    def _show(self, page, runs, **kwargs):
        with page.canvas.text() as t:
            t.set_font(BuiltinFont.HELVETICA, 10)
            t.show_adjusted(runs, **kwargs)
            return t.position

    def test_kerning_merged_with_offsets(self, kerned_document, kerned_page):
        """Kerning inside and between runs merges with client offsets."""
        position = self._show(kerned_page, ["AV", -100, "A"])
        assert b"[(A) 70 (V) -20 (A)] TJ" in content(kerned_document)
        # (600 + 500 + 600 - 70 - 80) / 100 + 100 / 100
        assert position == pytest.approx((16.5, 0))

    def test_without_kerning(self, kerned_document, kerned_page):
        position = self._show(kerned_page, ["AV", -100, "A"], kerning=False)
        assert b"[(AV) -100 (A)] TJ" in content(kerned_document)
        assert position == pytest.approx((18.0, 0))

    def test_leading_offset(self, kerned_document, kerned_page):
        position = self._show(kerned_page, [-50, "A"])
        assert b"[-50 (A)] TJ" in content(kerned_document)
        assert position == pytest.approx((6.5, 0))

    def test_explicit_zero_kept(self, kerned_document, kerned_page):
        """A zero offset given by the caller is written."""
        self._show(kerned_page, ["T", 0, "A"], kerning=False)
        assert b"[(T) 0 (A)] TJ" in content(kerned_document)

    def test_offsets_sum(self, kerned_document, kerned_page):
        """Consecutive offsets are combined."""
        position = self._show(kerned_page, ["T", 100, 50, "o"])
        # 50 kerning between T and o plus 150 from the caller
        assert b"[(T) 200 (o)] TJ" in content(kerned_document)
        assert position == pytest.approx(((400 + 300 - 50 - 150) / 100, 0))

    def test_bytes_runs(self, kerned_document, kerned_page):
        self._show(kerned_page, [b"A(", 10, b")"], kerning=False)
        assert b"[(A\\() 10 (\\))] TJ" in content(kerned_document)

    def test_boolean_offset_rejected(self, kerned_page):
        with pytest.raises(TypeError):
            self._show(kerned_page, ["A", True])


# ===================================================================
# Placed text
# ===================================================================


class TestPlacedText:
    """left_text, right_text and center_text."""

    def _td(self, document):
        ops = page_operations(document.to_bytes())
        return next([float(v) for v in operands] for operands, op in ops if op == "Td")

    def test_left(self, document, page):
        page.canvas.left_text(300, 700, BuiltinFont.HELVETICA, 12, "Hello World")
        assert self._td(document) == pytest.approx([300, 700])
        assert operators(document) == ["BT", "Tf", "Td", "Tj", "ET"]

    def test_right(self, document, page):
        page.canvas.right_text(300, 700, BuiltinFont.HELVETICA, 12, "Hello World")
        assert self._td(document) == pytest.approx([237.996, 700])

    def test_center(self, document, page):
        page.canvas.center_text(300, 700, BuiltinFont.HELVETICA, 12, "Hello World")
        assert self._td(document) == pytest.approx([268.998, 700])

    def test_registers_font(self, page):
        page.canvas.left_text(0, 0, BuiltinFont.TIMES_BOLD, 12, "x")
        assert list(page.fonts) == ["F1"]
        assert page.fonts["F1"].name == "Times-Bold"

    def test_not_inside_text_object(self, page):
        with page.canvas.text():
            with pytest.raises(TextStateError):
                page.canvas.left_text(0, 0, BuiltinFont.HELVETICA, 12, "x")
