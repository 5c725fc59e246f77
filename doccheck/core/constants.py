"""
Constants
=========
Centralised storage for the fixed vocabularies used by the scanner,
the claims extractor and the drift validator.

Every list here is part of the tool's observable behaviour: changing an
entry changes which findings are reported for a given project.
"""

# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------
# Checked in this order; first match wins.
MANIFEST_SIGNALS: list[tuple[str, str]] = [
    ("package.json",     "npm"),
    ("requirements.txt", "pip"),
    ("Cargo.toml",       "cargo"),
]

DEPENDENCY_CACHE_DIR = "node_modules"
SOURCE_DIR_ALIASES = ("src", "lib", "source")
TEST_DIRS = ("tests", "test", "__tests__", "spec")

# devDependency name → glob patterns it implies
TEST_FRAMEWORK_PATTERNS: list[tuple[str, tuple[str, ...]]] = [
    ("vitest", ("*.test.ts", "*.spec.ts")),
    ("jest",   ("*.test.js", "*.test.ts")),
    ("mocha",  ("*.spec.js",)),
]

GITHUB_WORKFLOWS_DIR = ".github/workflows"
GITLAB_CI_FILE = ".gitlab-ci.yml"

# ---------------------------------------------------------------------------
# Claims extractor
# ---------------------------------------------------------------------------
TECH_STACK_HEADINGS = ("tech stack", "built with", "technologies", "stack")

TREE_GLYPHS = ("├", "└", "│")
TREE_DRAWING_CHARS = "│├└─┬┼"

# yarn / pnpm subcommands that are never package scripts
NON_SCRIPT_SUBCOMMANDS = frozenset({
    "add", "remove", "install", "init", "run",
    "global", "config", "cache", "link", "unlink",
})

# ---------------------------------------------------------------------------
# Drift validator
# ---------------------------------------------------------------------------
TDD_MARKERS = ("tdd", "test-driven")

COMMON_SCRIPTS = ("dev", "build", "start", "test", "lint")

# Technologies that are legitimately claimed but never appear as packages
NON_PACKAGE_TECH = (
    # Hosting / deployment
    "vercel", "netlify", "github", "gitlab", "docker", "aws", "heroku", "railway",
    # Runtimes
    "node.js", "nodejs", "node", "deno", "bun",
    # AI services
    "claude", "claude sonnet", "openai", "gpt", "anthropic", "gemini",
    # Serverless concepts
    "serverless", "serverless functions", "lambda", "edge functions",
    # Hosted backends
    "supabase", "firebase", "planetscale", "neon",
)

# Runtime dependencies too generic to be worth documenting
UTILITY_PACKAGES = frozenset({
    "lodash", "underscore", "ramda",
    "axios", "node-fetch", "got",
    "dotenv", "cross-env",
    "uuid", "nanoid",
    "dayjs", "moment", "date-fns",
    "chalk", "colors", "picocolors",
    "debug", "winston", "pino",
})

# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
NEEDS_REVIEW = "[NEEDS REVIEW]"
