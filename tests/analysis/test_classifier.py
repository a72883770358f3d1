"""Tests for analysis/classifier.py - statement counting."""

import pytest

from unsafe_ratio import StatementCounts, analyze_source
from unsafe_ratio.analysis import StatementClassifier, StatementEnd
from unsafe_ratio.exceptions import MalformedInputError
from unsafe_ratio.scanning import scope_tokens, tokenize


def records(source):
    return list(StatementClassifier().statements(scope_tokens(tokenize(source))))


class TestBasicCounting:
    """Statement boundaries and the unsafe flag."""

    def test_empty_source(self):
        assert analyze_source("") == StatementCounts(0, 0)

    def test_comments_only(self):
        assert analyze_source("// nothing\n/* here */") == StatementCounts(0, 0)

    def test_unsafe_fn_body(self):
        assert analyze_source("unsafe fn f() { let x = 1; }") == StatementCounts(1, 1)

    def test_unsafe_block_between_safe_statements(self):
        source = "fn f() { let x = 1; unsafe { let y = 2; } let z = 3; }"
        assert analyze_source(source) == StatementCounts(1, 3)

    def test_nested_unsafe_blocks(self):
        assert analyze_source("fn f() { unsafe { unsafe { let a = 1; } } }") == StatementCounts(1, 1)

    def test_empty_statements_count(self):
        assert analyze_source("fn f() { ;; }") == StatementCounts(0, 2)

    def test_semicolon_after_block_statement(self):
        assert analyze_source("fn f() { unsafe { g(); }; }") == StatementCounts(1, 1)
        assert analyze_source("fn f() { match x { _ => { g(); } }; }") == StatementCounts(0, 1)
        assert analyze_source("fn f() { if c { a(); } else { b(); }; d(); }") == StatementCounts(0, 3)

    def test_empty_statement_after_block_semicolon(self):
        assert analyze_source("fn f() { { a(); };; }") == StatementCounts(0, 2)

    def test_tail_expression(self):
        assert analyze_source("fn f() -> i32 { 1 + 2 }") == StatementCounts(0, 1)

    def test_unsafe_tail_expression(self):
        assert analyze_source("fn f() -> u8 { unsafe { *p } }") == StatementCounts(1, 1)

    def test_let_with_unsafe_initializer(self):
        # the let itself is safe; the tail inside the block is unsafe
        assert analyze_source("fn f() { let v = unsafe { g() }; }") == StatementCounts(1, 2)

    def test_if_else_in_unsafe_fn(self):
        source = "unsafe fn f() { if c { a(); } else { b(); } }"
        assert analyze_source(source) == StatementCounts(2, 2)

    def test_else_if_chain(self):
        source = "fn f() { if a { x(); } else if b { y(); } else { unsafe { z(); } } }"
        assert analyze_source(source) == StatementCounts(1, 3)

    def test_array_repeat_semicolon(self):
        assert analyze_source("fn f() { let a = [0u8; 4]; }") == StatementCounts(0, 1)

    def test_struct_literal(self):
        assert analyze_source("fn f() { let p = Point { x: 1, y: 2 }; }") == StatementCounts(0, 1)

    def test_multiline_statement(self):
        source = "fn f() {\n    let x = g(\n        1,\n        2,\n    );\n}"
        assert analyze_source(source) == StatementCounts(0, 1)


class TestBlockLikeStatements:
    """Brace-terminated statements are not counted themselves."""

    def test_match_arms(self):
        source = """
        fn f(x: u8) -> u8 {
            match x {
                0 => unsafe { g() },
                1 => { h(); 2 }
                _ => 3,
            }
        }
        """
        assert analyze_source(source) == StatementCounts(1, 3)

    def test_match_followed_by_method_call(self):
        source = "fn f() { match x { _ => {} }.len(); }"
        assert analyze_source(source) == StatementCounts(0, 1)

    def test_loop_with_label(self):
        assert analyze_source("fn f() { 'outer: loop { break 'outer; } }") == StatementCounts(0, 1)

    def test_while_and_for(self):
        source = "fn f() { while a { b(); } for i in 0..3 { c(i); } d(); }"
        assert analyze_source(source) == StatementCounts(0, 3)

    def test_if_let_struct_pattern(self):
        assert analyze_source("fn f(p: P) { if let P { a } = p { g(a); } }") == StatementCounts(0, 1)

    def test_closure_body(self):
        source = "fn f() { let c = |x: u8| { x + 1 }; c(1); }"
        assert analyze_source(source) == StatementCounts(0, 3)

    def test_nested_fn_in_unsafe_block(self):
        assert analyze_source("fn f() { unsafe { fn g() { h(); } } }") == StatementCounts(1, 1)

    def test_attribute_on_statement(self):
        source = "fn f() { #[allow(unused)] let x = 1; #[cfg(test)] { y(); } }"
        assert analyze_source(source) == StatementCounts(0, 2)


class TestMacros:

    def test_macro_invocations(self):
        source = 'fn f() { println!("{}", 1); vec![1; 3]; m! { a; b; } }'
        assert analyze_source(source) == StatementCounts(0, 2)

    def test_macro_rules_body_not_counted(self):
        source = "macro_rules! m { ($e:expr) => { $e; $e; }; } fn f() { m!(1); }"
        assert analyze_source(source) == StatementCounts(0, 1)

    def test_block_in_macro_args_not_counted(self):
        assert analyze_source("fn f() { m!(unsafe { a(); }); }") == StatementCounts(0, 1)


class TestItems:
    """Only function and block bodies hold statements."""

    def test_module_items(self):
        source = """
        use std::ptr;
        const N: usize = 4;
        static mut COUNTER: u32 = 0;
        struct S { a: u8 }
        trait T { fn m(&self); }
        impl S {
            fn m(&self) { let x = 1; }
            unsafe fn n(&self) { let y = 2; }
        }
        """
        assert analyze_source(source) == StatementCounts(1, 2)

    def test_unsafe_impl(self):
        assert analyze_source("unsafe impl Send for S {} fn f() { let x = 1; }") == StatementCounts(0, 1)

    def test_unsafe_attribute_is_not_unsafe_context(self):
        source = '#[unsafe(no_mangle)] pub extern "C" fn f() { g(); }'
        assert analyze_source(source) == StatementCounts(0, 1)

    def test_unsafe_extern_fn(self):
        assert analyze_source('pub unsafe extern "C" fn f() { g(); }') == StatementCounts(1, 1)

    def test_unsafe_fn_pointer_return_type_is_safe(self):
        assert analyze_source("fn f() -> unsafe fn() { g() }") == StatementCounts(0, 1)

    def test_nested_module(self):
        source = "mod m { fn f() { a(); } mod n { unsafe fn g() { b(); } } }"
        assert analyze_source(source) == StatementCounts(1, 2)


class TestLexicalEdgeCases:

    def test_braces_in_literals(self):
        source = """
        fn f() {
            let a = r#"}"#;
            let b = '{';
            let c = "{ unsafe {";
            let d = b'}';
        }
        """
        assert analyze_source(source) == StatementCounts(0, 4)

    def test_lifetimes(self):
        assert analyze_source("fn f<'a>(x: &'a u8) -> &'a u8 { x }") == StatementCounts(0, 1)

    def test_unsafe_in_comment(self):
        source = "fn f() { // unsafe {\n let x = 1; /* } */ }"
        assert analyze_source(source) == StatementCounts(0, 1)


class TestStatementRecords:

    def test_end_kinds(self):
        ends = [r.end for r in records("fn f() { a(); ; b }")]
        assert ends == [StatementEnd.SEMICOLON, StatementEnd.EMPTY, StatementEnd.TAIL]

    def test_records_carry_position(self):
        record = records("fn f() {\n    a();\n}")[0]
        assert (record.line, record.column) == (2, 8)

    def test_empty_statement_in_unsafe_block(self):
        assert [r.is_unsafe for r in records("fn f() { unsafe { ; } ; ; }")] == [True, False]


class TestInvariants:

    @pytest.mark.parametrize(
        "source",
        [
            "fn f() { let x = 1; unsafe { let y = 2; } let z = 3; }",
            "unsafe fn f() { if c { a(); } else { b(); } }",
            "fn f() { ;; }",
            "impl S { unsafe fn n(&self) { let y = 2; } }",
        ],
    )
    def test_unsafe_never_exceeds_total(self, source):
        counts = analyze_source(source)
        assert 0 <= counts.unsafe_count <= counts.total_count

    def test_whitespace_does_not_change_counts(self):
        compact = "fn f(){let x=1;unsafe{let y=2;}let z=3;}"
        spread = "fn f()\n{\n  let x = 1;\n  unsafe\n  {\n    let y = 2;\n  }\n  let z = 3;\n}\n"
        assert analyze_source(compact) == analyze_source(spread) == StatementCounts(1, 3)


class TestMalformed:

    def test_unclosed_brace(self):
        with pytest.raises(MalformedInputError, match="unclosed"):
            analyze_source("fn f() { let x = 1;")

    def test_extra_closing_brace(self):
        with pytest.raises(MalformedInputError, match="unmatched closing brace"):
            analyze_source("fn f() {}}")

    def test_unterminated_string(self):
        with pytest.raises(MalformedInputError):
            analyze_source('fn f() { let s = "oops; }')
