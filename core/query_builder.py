"""
Query Builder — Prompt templates for the three research intents.

Intents:
  - explain:   answer a question about one registry
  - papers:    find economics papers that use a registry
  - variables: look up DST variable documentation

Each prompt embeds a `site:` search directive so Gemini's Google Search
grounding stays on trusted domains. The allow-lists below are the only
place those domains are defined.

All functions here are pure string formatting. Defaults (e.g. the generic
registry label) are applied by the caller, never here.
"""

# ──────────────────────────────────────────────
# Domain Allow-lists
# ──────────────────────────────────────────────
PAPER_DOMAINS = (
    "aeaweb.org",                      # AEA journals (AER, AEJ: Applied, ...)
    "nber.org",                        # NBER Working Papers
    "cepr.org",                        # CEPR Discussion Papers
    "academic.oup.com/qje",            # Quarterly Journal of Economics
    "journals.uchicago.edu/tocs/jpe",  # Journal of Political Economy
)

VARIABLE_DOMAINS = (
    "dst.dk/da/Statistik/dokumentation/Times",
    "dst.dk/extranet/forskningvariabellister",
    "esundhed.dk",
)

DEFAULT_REGISTRY_LABEL = "Administrative Data"


def site_directive(domains) -> str:
    """Join domains into a Google `site:` OR-expression."""
    return " OR ".join(f"site:{domain}" for domain in domains)


# ──────────────────────────────────────────────
# Prompt Builders
# ──────────────────────────────────────────────
def build_explain_prompt(registry_code: str, user_question: str) -> str:
    """
    Build the registry-assistant prompt.

    Args:
        registry_code: Registry short code (e.g. "IND", "BEF")
        user_question: The question as typed by the user

    Returns:
        Prompt string asking for a concise, search-grounded answer
    """
    return f"""You are an expert in Danish Statistics (DST).
Registry: "{registry_code}"
User Question: "{user_question}"

Provide a concise, expert answer. Use Google Search to ensure information about variable coverage is current."""


def build_paper_search_prompt(registry_name: str, topic: str | None = None) -> str:
    """
    Build the literature-finder prompt.

    The search directive restricts Google Search to PAPER_DOMAINS.
    `topic` is appended verbatim to the search context when given.

    Args:
        registry_name: Registry display name, or DEFAULT_REGISTRY_LABEL
        topic: Optional research topic / keyword

    Returns:
        Prompt string asking for 4-5 papers in a fixed markdown layout
    """
    domain_query = f"({site_directive(PAPER_DOMAINS)})"
    context_query = f'"Danish {registry_name}" OR "Denmark {registry_name}" {topic or ""}'.rstrip()

    return f"""Find 4-5 distinct, high-quality economics research papers.

SEARCH CONTEXT:
The user wants papers that use Danish Administrative Data (specifically "{registry_name}").
Focus ONLY on:
1. American Economic Association (AEA) journals (AER, AEJ: Applied, etc.)
2. NBER Working Papers
3. CEPR Discussion Papers
4. Quarterly Journal of Economics (QJE)

QUERY TO USE: {domain_query} {context_query}

OUTPUT FORMAT (Markdown):
Return a clean list. For each paper:

### [Title of the Paper]
*   **Authors**: [Author Names]
*   **Source**: [Journal Name/Working Paper Series] ([Year])
*   **Data Usage**: [Specific mention of how they used {registry_name} or Danish data]
*   🔗 [Link to abstract/PDF]([URL])

If you cannot find papers for this specific registry in these top journals, broaden the search to "Danish administrative data" generally but keep the high-quality journal constraint.
"""


def build_variable_search_prompt(query: str) -> str:
    """
    Build the variable-explorer prompt.

    Asks for a markdown table when several variables match and a single
    definition block when one exact match is found.
    """
    search_directives = site_directive(VARIABLE_DOMAINS)

    return f"""Act as a Danish Statistics (DST) expert. The user is looking for variable documentation.

User Query: "{query}"

SEARCH STRATEGY:
1. Use Google Search to find the variable code in the DST "Times" documentation or "Forskningvariabellister".
2. Search Query to execute: `{search_directives} "{query}"`
3. Look for pages that contain the variable code (e.g. AEL_KOMKOD, SOC_STATUS) in the URL or title.

OUTPUT REQUIREMENTS:
If you find a match, extract:
- **Variable Code** (e.g. AEL_KOMKOD)
- **Definition** (What does it measure?)
- **Values/Categories** (e.g., 1=Married, 2=Unmarried)
- **Period** (Years available)

Format the output as a Markdown Table if multiple variables are found, or a detailed definition block if one specific variable is found.

Example Table Format:
| Code | Description | Dataset/Module | Years |
| :--- | :--- | :--- | :--- |
| ... | ... | ... | ... |

Always provide the specific URL to the documentation page found.
"""
