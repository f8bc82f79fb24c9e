"""Tests for it()/test() block extraction and brace balancing."""
import time

from tautology_guard.analyzer.models import BlockStyle
from tautology_guard.analyzer.test_blocks import extract_block_body, extract_test_blocks


class TestExtractTestBlocks:
    """Finding test call sites."""

    def test_it_block(self):
        content = """
          it('should do something', () => {
            expect(true).toBe(true);
          });
        """
        blocks = extract_test_blocks(content)
        assert len(blocks) == 1
        assert blocks[0].description == "should do something"
        assert blocks[0].style is BlockStyle.IT

    def test_test_block(self):
        blocks = extract_test_blocks("test('works', () => { expect(1).toBe(1); });")
        assert len(blocks) == 1
        assert blocks[0].style is BlockStyle.TEST

    def test_both_styles_in_order(self):
        content = """
          it('using it', () => {});
          test('using test', () => {});
        """
        blocks = extract_test_blocks(content)
        assert [block.style for block in blocks] == [BlockStyle.IT, BlockStyle.TEST]
        assert [block.description for block in blocks] == ["using it", "using test"]

    def test_skip_and_only_variants(self):
        content = """
          it.skip('skipped it', () => {});
          test.skip('skipped test', () => {});
          it.only('focused it', () => {});
          test.only('focused test', () => {});
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == [
            "skipped it", "skipped test", "focused it", "focused test",
        ]

    def test_all_quote_styles(self):
        content = """
          it("double", () => {});
          it('single', () => {});
          it(`backtick`, () => {});
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == ["double", "single", "backtick"]

    def test_other_identifiers_are_ignored(self):
        content = """
          describe('suite', () => {});
          submit('form', () => {});
          latest('value', () => {});
          it_('nope', () => {});
        """
        assert extract_test_blocks(content) == []

    def test_async_body(self):
        content = """
          it('async test', async () => {
            await someAsyncOperation();
          });
        """
        blocks = extract_test_blocks(content)
        assert len(blocks) == 1
        assert "someAsyncOperation" in blocks[0].body

    def test_line_numbers_are_one_based(self):
        content = """describe('suite', () => {
  it('first test', () => {});

  it('second test', () => {});
});"""
        blocks = extract_test_blocks(content)
        assert [block.line_number for block in blocks] == [2, 4]

    def test_first_line(self):
        blocks = extract_test_blocks("it('top', () => {});")
        assert blocks[0].line_number == 1

    def test_nested_braces_in_body(self):
        content = """
          it('complex test', () => {
            const obj = { nested: { value: true } };
            if (obj.nested.value) {
              expect(true).toBe(true);
            }
          });
          it('next', () => { other(); });
        """
        blocks = extract_test_blocks(content)
        assert len(blocks) == 2
        assert "nested" in blocks[0].body
        assert "expect(true)" in blocks[0].body
        assert "other()" not in blocks[0].body


class TestNonCodeSuppression:
    """Test-shaped text inside strings and comments is not a test."""

    def test_template_literal(self):
        content = """
          import { extractTestBlocks } from './detector';

          it('outer real test', () => {
            const content = `
              it('inner fake test', () => {
                expect(true).toBe(true);
              });
            `;
            expect(extractTestBlocks(content)).toHaveLength(1);
          });
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == ["outer real test"]

    def test_single_quoted_string(self):
        content = """
          it('outer test', () => {
            const str = 'it("inner", () => { expect(1).toBe(1); })';
            expect(str).toBeDefined();
          });
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == ["outer test"]

    def test_double_quoted_string(self):
        content = """
          const str = "test('inner', () => {})";
          test('outer', () => {});
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == ["outer"]

    def test_nested_template_before_real_test(self):
        content = (
            "const x = `outer ${`inner`} still outer`;\n"
            "it('real', () => {\n"
            "  expect(1).toBe(1);\n"
            "});\n"
        )
        blocks = extract_test_blocks(content)
        assert len(blocks) == 1
        assert blocks[0].description == "real"
        assert blocks[0].line_number == 2

    def test_line_comment(self):
        content = """
          // it('commented out test', () => { expect(true).toBe(true); });
          it('real test', () => {
            expect(1).toBe(1);
          });
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == ["real test"]

    def test_block_comment(self):
        content = """
          /* it('block commented test', () => { expect(true).toBe(true); }); */
          it('real test', () => {
            expect(1).toBe(1);
          });
        """
        blocks = extract_test_blocks(content)
        assert [block.description for block in blocks] == ["real test"]


class TestExtractBlockBody:
    """Brace balancing."""

    def test_balanced_block(self):
        content = "it('x', () => { a(); }); after();"
        assert extract_block_body(content) == "{ a(); }"

    def test_starts_search_at_offset(self):
        content = "{ first } it('x', () => { second });"
        start = content.index("it(")
        assert extract_block_body(content, start) == "{ second }"

    def test_braces_in_strings_are_ignored(self):
        content = """it('x', () => { const s = '}'; const t = "{"; const u = `}`; done(); });"""
        body = extract_block_body(content)
        assert body.endswith("done(); }")

    def test_escaped_quote_in_string(self):
        content = r"""it('x', () => { const s = 'it\'s } here'; done(); });"""
        assert extract_block_body(content).endswith("done(); }")

    def test_unclosed_block_runs_to_end(self):
        content = "it('x', () => { never(); "
        assert extract_block_body(content) == "{ never(); "

    def test_no_brace(self):
        assert extract_block_body("it('x', fn);") == ""


class TestLargeFiles:
    """Extraction stays a single pass over the file."""

    BLOCKS = 3000

    def build(self) -> str:
        parts = ["import { fn } from './fn';\n"]
        for k in range(self.BLOCKS):
            # Every third call is commented out
            prefix = "// " if k % 3 == 2 else ""
            parts.append(
                f"{prefix}it('case {k}', () => {{\n"
                f"  expect(fn({k})).toBe({k});\n"
                f"}});\n"
                f"\n"
            )
        return "".join(parts)

    def test_thousands_of_blocks(self):
        content = self.build()

        started = time.perf_counter()
        blocks = extract_test_blocks(content)
        elapsed = time.perf_counter() - started

        expected = [k for k in range(self.BLOCKS) if k % 3 != 2]
        assert [block.description for block in blocks] == [f"case {k}" for k in expected]
        assert [block.line_number for block in blocks] == [2 + 4 * k for k in expected]
        assert blocks[-1].body == f"{{\n  expect(fn({expected[-1]})).toBe({expected[-1]});\n}}"
        assert elapsed < 10
