"""
Unit Tests — Claims Extractor
=============================
Tech stack, directory tree and command extraction from README Markdown,
plus the shared normalization helpers.
"""
import pytest

from doccheck.parser.claims_extractor import (
    extract_claims,
    extract_command_claims,
    extract_structure_claims,
    extract_tech_stack_claims,
    parse_directory_tree,
)
from doccheck.parser.text_utils import dedupe, normalize_tech_name


# ===========================================================================
# 1. Normalization helpers
# ===========================================================================
class TestNormalizeTechName:

    def test_spaces_removed(self):
        assert normalize_tech_name("Tailwind CSS") == "tailwindcss"
        assert normalize_tech_name("tailwindcss") == "tailwindcss"

    def test_node_js_variants_equal(self):
        assert normalize_tech_name("Node.js") == normalize_tech_name("nodejs")

    def test_dashes_and_underscores_removed(self):
        assert normalize_tech_name("date-fns") == "datefns"
        assert normalize_tech_name("snake_case_lib") == "snakecaselib"

    @pytest.mark.parametrize("name", [
        "Tailwind CSS", "Node.js", "Next.js", "  React  ", "vue-router", "a.b-c_d e",
    ])
    def test_idempotent(self, name):
        once = normalize_tech_name(name)
        assert normalize_tech_name(once) == once


class TestDedupe:

    def test_keeps_first_occurrence_order(self):
        assert dedupe(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]

    def test_empty(self):
        assert dedupe([]) == []


# ===========================================================================
# 2. Tech stack pass
# ===========================================================================
TECH_README = """# Demo

Some intro text.

## Tech Stack

- **Frontend**: React 18, Vite, Tailwind CSS (utility-first)
- **Backend**: Express v4
- TypeScript 5.3.2
- **Node.js**

### Testing
- Vitest

## Getting Started
- Clone the repo
"""


class TestTechStackClaims:

    def test_labeled_and_plain_items(self):
        assert extract_tech_stack_claims(TECH_README) == [
            "React", "Vite", "Tailwind CSS", "Express", "TypeScript", "Node.js", "Vitest",
        ]

    def test_section_closed_by_same_level_heading(self):
        assert "Clone the repo" not in extract_tech_stack_claims(TECH_README)

    def test_deeper_heading_stays_in_section(self):
        readme = "## Built With\n### Tools\n- Docker\n# Next\n- Nope\n"
        assert extract_tech_stack_claims(readme) == ["Docker"]

    def test_heading_match_is_case_insensitive(self):
        readme = "# TECHNOLOGIES USED\n- Django\n"
        assert extract_tech_stack_claims(readme) == ["Django"]

    def test_list_outside_section_ignored(self):
        readme = "## Features\n- Fast\n- Small\n"
        assert extract_tech_stack_claims(readme) == []

    def test_single_character_claims_dropped(self):
        readme = "## Stack\n- R\n- Go\n"
        assert extract_tech_stack_claims(readme) == ["Go"]

    def test_duplicates_removed(self):
        readme = "## Stack\n- React\n- **UI**: React, Redux\n"
        assert extract_tech_stack_claims(readme) == ["React", "Redux"]

    def test_star_bullets(self):
        readme = "## Stack\n* Flask\n"
        assert extract_tech_stack_claims(readme) == ["Flask"]

    def test_no_readme_sections(self):
        assert extract_tech_stack_claims("") == []
        assert extract_tech_stack_claims("just prose, no headings") == []


# ===========================================================================
# 3. Structure pass
# ===========================================================================
class TestDirectoryTree:

    def test_box_drawing_example(self):
        readme = "```\nsrc/\n├── components/\n└── utils.ts\n```\n"
        assert extract_structure_claims(readme) == ["src/", "src/components/"]

    def test_nested_tree_with_comments(self):
        lines = [
            "my-app/",
            "├── src/",
            "│   ├── components/   # UI pieces",
            "│   └── utils/",
            "├── docs/",
            "└── package.json",
        ]
        assert parse_directory_tree(lines) == [
            "my-app/",
            "my-app/src/",
            "my-app/src/components/",
            "my-app/src/utils/",
            "my-app/docs/",
        ]

    def test_space_indented_tree_without_glyphs(self):
        lines = ["src/", "  api/", "  models/"]
        assert parse_directory_tree(lines) == ["src/", "src/api/", "src/models/"]

    def test_glyphs_without_directories_yield_nothing(self):
        lines = ["├── index.ts", "└── README.md"]
        assert parse_directory_tree(lines) == []

    def test_shell_block_is_not_a_tree(self):
        readme = "```bash\nnpm install\nnpm run dev\n```\n"
        assert extract_structure_claims(readme) == []

    def test_claims_deduplicated_across_blocks(self):
        readme = "```\nsrc/\n```\n\ntext\n\n```\nsrc/\ndocs/\n```\n"
        assert extract_structure_claims(readme) == ["src/", "docs/"]

    def test_unterminated_block_ignored(self):
        readme = "```\nsrc/\n├── lib/\n"
        assert extract_structure_claims(readme) == []

    def test_no_code_blocks(self):
        assert extract_structure_claims("# Title\nprose only\n") == []


# ===========================================================================
# 4. Commands pass
# ===========================================================================
class TestCommandClaims:

    def test_npm_run_in_prose(self):
        text = "Run `npm run build` or `npm run test` to verify."
        assert extract_command_claims(text) == ["build", "test"]

    def test_duplicates_removed(self):
        text = "npm run dev\nthen npm run dev again"
        assert extract_command_claims(text) == ["dev"]

    def test_yarn_and_pnpm_short_form(self):
        text = "yarn dev\npnpm build\n"
        assert extract_command_claims(text) == ["dev", "build"]

    def test_stoplisted_subcommands_skipped(self):
        text = "yarn add lodash\npnpm install\nyarn global add x\nyarn lint"
        assert extract_command_claims(text) == ["lint"]

    def test_yarn_run_counted_once(self):
        assert extract_command_claims("yarn run lint") == ["lint"]

    def test_run_form_listed_before_short_form(self):
        assert extract_command_claims("yarn dev, then npm run build") == ["build", "dev"]

    def test_script_names_with_colons_and_dashes(self):
        text = "npm run test:unit && pnpm run build-prod"
        assert extract_command_claims(text) == ["test:unit", "build-prod"]

    def test_name_must_start_with_letter(self):
        assert extract_command_claims("npm run 123") == []

    def test_npm_install_is_not_a_command(self):
        assert extract_command_claims("npm install && npm ci") == []


# ===========================================================================
# 5. Full extraction
# ===========================================================================
FULL_README = """# Demo

## Tech Stack
- React 18

## Structure
```
src/
├── components/
└── utils.ts
```

Start with `npm run dev`.
"""


class TestExtractClaims:

    def test_all_three_passes(self):
        claims = extract_claims(FULL_README)
        assert claims.tech_stack == ["React"]
        assert claims.structure == ["src/", "src/components/"]
        assert claims.commands == ["dev"]

    def test_idempotent(self):
        assert extract_claims(FULL_README) == extract_claims(FULL_README)

    def test_empty_readme(self):
        claims = extract_claims("")
        assert claims.tech_stack == []
        assert claims.structure == []
        assert claims.commands == []

    def test_json_shape_uses_camel_case(self):
        data = extract_claims(FULL_README).to_json_dict()
        assert set(data) == {"techStack", "structure", "commands"}
