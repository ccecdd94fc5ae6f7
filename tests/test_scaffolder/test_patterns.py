"""Tests for the TypeScript pattern helpers.

Covers:
- Exported class extraction (handlers and suffixed classes)
- Barrel array entries and whole-token spread lookup
- Import statement discovery, including multi-line imports
- Comment- and string-aware bracket matching
- Locating ``@Module({...})`` and its ``providers`` array
- Additive insertion of imports and array elements
"""

from __future__ import annotations

import pytest

from cquver.scaffolder.patterns import (
    append_element,
    barrel_entries,
    contains_spread,
    detect_newline,
    extract_class_name,
    extract_handler_name,
    find_decorator_object,
    find_matching_bracket,
    find_providers_array,
    insert_import,
    last_import_end,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Class extraction
# ---------------------------------------------------------------------------


class TestExtraction:
    def test_handler_name(self):
        content = "@CommandHandler(X)\nexport class CreateUserCommandHandler implements Y {}"
        assert extract_handler_name(content) == "CreateUserCommandHandler"

    def test_handler_requires_suffix_at_word_end(self):
        assert extract_handler_name("export class HandlerFactory {}") is None

    def test_handler_missing(self):
        assert extract_handler_name("const x = 1;") is None

    def test_first_handler_wins(self):
        content = "export class AHandler {}\nexport class BHandler {}\n"
        assert extract_handler_name(content) == "AHandler"

    def test_class_with_suffix(self):
        content = "export class Helper {}\nexport class BillingService {}\n"
        assert extract_class_name(content, "Service") == "BillingService"

    def test_class_suffix_case_insensitive(self):
        assert extract_class_name("export class SyncUsecase {}", "UseCase") == "SyncUsecase"

    def test_abstract_class(self):
        assert (
            extract_class_name("export abstract class BaseService {}", "Service")
            == "BaseService"
        )

    def test_class_missing(self):
        assert extract_class_name("export class Helper {}", "Service") is None


# ---------------------------------------------------------------------------
# Barrel entries and spreads
# ---------------------------------------------------------------------------


class TestBarrelEntries:
    def test_entries_in_listed_order(self):
        content = (
            "import { ZetaJobCommandHandler } from './zeta-job';\n"
            "\n"
            "export const CommandHandlers = [\n"
            "  ZetaJobCommandHandler,\n"
            "  AlphaJobCommandHandler,\n"
            "];\n"
            "\n"
            "export { ZetaJobCommand };\n"
        )
        assert barrel_entries(content) == ["ZetaJobCommandHandler", "AlphaJobCommandHandler"]

    def test_crlf_entries(self):
        assert barrel_entries("export const X = [\r\n  A,\r\n  B,\r\n];\r\n") == ["A", "B"]

    def test_no_entries(self):
        assert barrel_entries("") == []


class TestContainsSpread:
    def test_exact_token(self):
        assert contains_spread("providers: [...CommandHandlers],", "...CommandHandlers")

    def test_longer_name_does_not_count(self):
        content = "providers: [\n    ...CommandHandlersV2,\n  ],"
        assert not contains_spread(content, "...CommandHandlers")

    def test_followed_by_newline(self):
        assert contains_spread("  ...QueryHandlers\n]", "...QueryHandlers")

    def test_missing(self):
        assert not contains_spread("providers: []", "...EventHandlers")


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


class TestImports:
    def test_no_imports(self):
        assert last_import_end("export class A {}\n") is None

    def test_last_import_end(self):
        content = "import { A } from './a';\nimport { B } from './b';\n\nconst x = 1;\n"
        assert content[: last_import_end(content)].endswith("import { B } from './b';")

    def test_multi_line_import(self):
        content = (
            "import {\n  A,\n  B,\n} from './ab';\n"
            "\n@Module({})\nexport class M {}\n"
        )
        assert content[: last_import_end(content)].endswith("} from './ab';")

    def test_side_effect_import(self):
        content = "import 'reflect-metadata';\nexport class A {}\n"
        assert content[: last_import_end(content)] == "import 'reflect-metadata';"

    def test_insert_after_last_import(self):
        content = "import { A } from './a';\n\nexport class M {}\n"
        result = insert_import(content, "import { B } from './b';")
        assert result == (
            "import { A } from './a';\nimport { B } from './b';\n\nexport class M {}\n"
        )

    def test_insert_prepends_without_imports(self):
        result = insert_import("export class M {}\n", "import { B } from './b';")
        assert result == "import { B } from './b';\n\nexport class M {}\n"

    def test_insert_keeps_crlf(self):
        content = "import { A } from './a';\r\nexport class M {}\r\n"
        result = insert_import(content, "import { B } from './b';", detect_newline(content))
        assert result == (
            "import { A } from './a';\r\nimport { B } from './b';\r\nexport class M {}\r\n"
        )


# ---------------------------------------------------------------------------
# Bracket matching
# ---------------------------------------------------------------------------


class TestBrackets:
    def test_nested(self):
        content = "[a, [b, c], { d: [e] }]"
        assert find_matching_bracket(content, 0) == len(content) - 1

    def test_ignores_brackets_in_strings(self):
        content = "[ ']', \"[\", `]` ]"
        assert find_matching_bracket(content, 0) == len(content) - 1

    def test_ignores_brackets_in_comments(self):
        content = "[\n  A, // ] not the end\n  /* ] */ B,\n]"
        assert find_matching_bracket(content, 0) == len(content) - 1

    def test_unbalanced(self):
        assert find_matching_bracket("[a, b", 0) is None


# ---------------------------------------------------------------------------
# Module decorator
# ---------------------------------------------------------------------------


class TestModuleDecorator:
    def test_find_decorator_object(self):
        content = "@Module({ imports: [] })\nexport class M {}"
        span = find_decorator_object(content)
        assert span is not None
        assert content[span[0] : span[1] + 1] == "{ imports: [] }"

    def test_decorator_missing(self):
        assert find_decorator_object("export class M {}") is None

    def test_providers_inside_decorator_only(self):
        content = (
            "const providers: [] = [];\n"
            "@Module({\n  providers: [A],\n})\nexport class M {}\n"
        )
        span = find_providers_array(content)
        assert span is not None
        assert content[span[0] : span[1] + 1] == "[A]"

    def test_providers_missing(self, module_without_providers: str):
        assert find_providers_array(module_without_providers) is None


# ---------------------------------------------------------------------------
# append_element
# ---------------------------------------------------------------------------


def _append(content: str, element: str) -> str:
    open_index = content.index("[")
    close_index = find_matching_bracket(content, open_index)
    return append_element(content, open_index, close_index, element, detect_newline(content))


class TestAppendElement:
    def test_empty_array(self):
        assert _append("providers: []", "...X") == "providers: [\n  ...X,\n]"

    def test_single_line(self):
        assert _append("providers: [A, B]", "...X") == "providers: [A, B, ...X]"

    def test_single_line_trailing_comma(self):
        assert _append("providers: [A,]", "...X") == "providers: [A, ...X,]"

    def test_multi_line_trailing_comma(self):
        content = "  providers: [\n    A,\n  ],"
        assert _append(content, "...X") == "  providers: [\n    A,\n    ...X,\n  ],"

    def test_multi_line_without_trailing_comma(self):
        content = "  providers: [\n    A\n  ],"
        assert _append(content, "...X") == "  providers: [\n    A,\n    ...X\n  ],"

    def test_only_comments(self):
        content = "providers: [\n  // none yet\n]"
        assert _append(content, "...X") == "providers: [\n  // none yet\n  ...X,\n]"

    def test_crlf_preserved(self):
        content = "  providers: [\r\n    A,\r\n  ],"
        assert _append(content, "...X") == "  providers: [\r\n    A,\r\n    ...X,\r\n  ],"
