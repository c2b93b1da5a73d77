"""Static lookup tables used by extraction, parsing and injection.

Configuration data only; the algorithms live in keyword_extractor,
section_parser and keyword_injector. Keyword sets ranked by the fallback
carry VOCABULARY_VERSION; bump it whenever a table changes so cached results
can be traced to the tables that built them.
"""

VOCABULARY_VERSION = "2025.1"

# ---------------------------------------------------------------------------
# Extraction: words never worth ranking as job keywords
# ---------------------------------------------------------------------------
STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "been", "be",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can", "need", "this", "that",
    "you", "your", "we", "our", "they", "their",
    # JD boilerplate
    "work", "working", "job", "position", "role", "team", "company",
    "opportunity", "looking", "seeking", "required", "requirements",
    "preferred", "ability", "able", "experience", "years", "year",
    "including", "new",
})

# ---------------------------------------------------------------------------
# Extraction: domain terms whose frequency is boosted.
# Multi-word entries match as a literal lowercase token sequence.
# Entries shorter than MIN_TOKEN_CHARS ("ai", "ml") only count when they
# appear inside a multi-word entry.
# ---------------------------------------------------------------------------
DOMAIN_TERMS: frozenset[str] = frozenset({
    "python", "java", "javascript", "typescript", "sql", "aws", "azure", "gcp",
    "kubernetes", "docker", "terraform", "react", "angular", "vue", "node",
    "spark", "kafka", "airflow", "tableau", "snowflake",
    "machine learning", "deep learning", "ai", "ml", "nlp",
    "agile", "scrum", "ci/cd", "devops", "api", "rest", "graphql",
    "microservices",
})

BOOST_FACTOR = 3
MIN_TOKEN_CHARS = 3

# ---------------------------------------------------------------------------
# Skills consolidation: canonical casing for well-known proper nouns
# ---------------------------------------------------------------------------
PROPER_NOUNS: tuple[str, ...] = (
    "Python", "SQL", "TensorFlow", "Spark", "XGBoost", "LightGBM", "AWS",
    "Azure", "Google Cloud Platform", "GCP", "Kubernetes", "Docker",
    "Terraform", "Apache Spark", "Airflow", "Kafka", "Snowflake", "Jenkins",
    "GitHub Actions", "Agile", "Scrum", "Java", "JavaScript", "TypeScript",
    "React", "Angular", "Tableau", "GraphQL", "NLP", "DevOps", "CI/CD",
    "REST", "API",
)

PROPER_NOUN_LOOKUP: dict[str, str] = {p.lower(): p for p in PROPER_NOUNS}

# ---------------------------------------------------------------------------
# Section parsing: header spellings per canonical section (regex fragments),
# and the header each section is serialized under.
# ---------------------------------------------------------------------------
SECTION_HEADERS: dict[str, list[str]] = {
    "summary": [
        r"professional[ \t]+summary",
        r"career[ \t]+summary",
        r"summary",
        r"profile",
        r"objective",
    ],
    "experience": [
        r"work[ \t]+experience",
        r"professional[ \t]+experience",
        r"experience",
        r"employment(?:[ \t]+history)?",
        r"work[ \t]+history",
    ],
    "skills": [
        r"technical[ \t]+skills",
        r"core[ \t]+skills",
        r"key[ \t]+skills",
        r"skills",
    ],
    "education": [
        r"education",
        r"academic(?:[ \t]+background)?",
    ],
    "certifications": [
        r"licen[sc]es?[ \t]*(?:&|and)[ \t]*certifications?",
        r"certifications?",
        r"licen[sc]es?",
    ],
}

SECTION_TITLES: dict[str, str] = {
    "summary": "PROFESSIONAL SUMMARY",
    "experience": "EXPERIENCE",
    "skills": "SKILLS",
    "education": "EDUCATION",
    "certifications": "CERTIFICATIONS",
}

# Lines recognised as experience bullets start with one of these
BULLET_GLYPHS: tuple[str, ...] = ("-", "•", "*")
