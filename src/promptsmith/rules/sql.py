"""Database design and query rules."""

from __future__ import annotations

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, build_rules

# General vague-term rules run first, so domain patterns also accept their output.
_VAGUE = (
    ("sql.vague.pretty_table", r"\b(?:well-designed|bonit[oa]s?)\s+(?:tablas?|tables?)\b", "well-structured, normalized database table", "Replace vague table wording with schema terminology"),
    ("sql.vague.good_query", r"\b(?:high-quality|buen[oa]s?)\s+(?:query|consulta)\b", "optimized SQL query with proper indexing", "Enhance vague query wording with performance considerations"),
    ("sql.vague.bad_query", r"\b(?:problematic|mal[oa])\s+(?:query|consulta)\b", "inefficient query that needs optimization", "Clarify what makes a query problematic"),
    ("sql.vague.sql_table", r"\btablas?\s+sql\b", "database table schema", "Remove redundant SQL qualifier on tables"),
    ("sql.vague.database", r"\b(?:bd|base\s+de\s+datos)\b", "relational database", "Use English database terminology"),
    ("sql.vague.run_query", r"\bhacer\s+(?:query|consulta)\b", "execute SQL query", "Use proper SQL action verbs"),
)

_STRUCTURE = (
    ("sql.structure.request_opening", r"^(?:hazme|dame|necesito)\s+(?:una?\s+)?", "Generate a database schema for a ", "Convert a casual command into a professional request"),
    ("sql.structure.create_table", r"^(?:create|make|build)\s+(?:a\s+)?table\b", "Design a database table", "Use design-oriented language"),
    ("sql.structure.with_join", r"\bcon\s+join\b", "including appropriate JOIN operations", "Clarify JOIN requirements"),
    ("sql.structure.optimized", r"\boptimizad[oa]s?\b", "with performance optimizations including indexes", "Specify optimization techniques"),
    ("sql.structure.fast_query", r"\bfast\s+query\b", "performance-optimized query with appropriate indexes", "Specify how query performance is achieved"),
)

_APPEND = (
    ("sql.enhance.sample_data", r"\b(?:table|tabla|schema)s?\b", r"\b(?:sample|example)", "Include sample data (5-10 rows) to illustrate the table structure.", "Request sample data"),
    ("sql.enhance.indexes", r"\b(?:performance|fast|slow|optimi[sz]e)", r"\bindex", "Consider appropriate indexes for performance optimization.", "Add indexing considerations"),
    ("sql.enhance.relationships", r"\b(?:join|relationship|foreign|key)\b", r"\bconstraint", "Include foreign key constraints and relationship definitions.", "Add relationship specifications"),
    ("sql.enhance.data_types", r"\b(?:create|table|tabla|schema)\b", r"\bdata\s+types?\b", "Specify appropriate data types for each column (VARCHAR, INTEGER, TIMESTAMP).", "Add data type specifications"),
)

_BEST_PRACTICE = (
    ("sql.practice.naming", r"\b(?:table|tabla|column|field)s?\b", r"\bnaming\b", "Use snake_case naming for tables and columns.", "Add naming convention guidance"),
    ("sql.practice.comments", r"\b(?:complex|multiple|join|subquery)\b", r"\bcomments?\b", "Include explanatory comments for complex queries and table structures.", "Add comment requirements"),
    ("sql.practice.normalization", r"\b(?:database|schema|design|table|tabla)s?\b", r"\bnormali[sz]", "Ensure proper normalization (3NF) while weighing performance trade-offs.", "Add normalization guidance"),
    ("sql.practice.migration", r"\b(?:production|deploy|migration|update)\b", r"\brollback\b", "Consider migration scripts and rollback procedures for production deployment.", "Add migration considerations"),
)

RULES = build_rules(
    Domain.SQL,
    vague=_VAGUE,
    structure=_STRUCTURE,
    enhancements=_APPEND,
    practices=_BEST_PRACTICE,
)

SYSTEM_PROMPT = """You are a senior database architect and SQL expert with extensive experience in:

**Database Design:**
- Relational modeling and normalization (1NF, 2NF, 3NF, BCNF)
- Entity-relationship diagrams and schema design
- Data integrity, constraints and referential integrity

**SQL Expertise:**
- Query optimization and execution plans
- Joins, subqueries, window functions and CTEs
- Engine-specific features (PostgreSQL, MySQL, SQLite, SQL Server)

**Best Practices:**
- SQL injection prevention and secure access patterns
- Transaction management and ACID properties
- Index design for large datasets

Always provide clean, well-formatted SQL with consistent indentation, snake_case
naming, appropriate data types and constraints, and comments on complex logic.
Explain trade-offs between approaches when they matter."""

PROFILE = DomainProfile(
    domain=Domain.SQL,
    description="Database design, SQL queries and database optimization",
    rules=RULES,
    required_elements=(
        RequiredElement("entity", r"\b(?:table|tabla|schema|entity|query|consulta|view)s?\b", "the table, schema or query being requested"),
        RequiredElement("data_types", r"\b(?:data\s+types?|varchar|integer|timestamp|columns?)\b", "column names or data types"),
        RequiredElement("constraints", r"\b(?:constraints?|primary\s+key|foreign\s+key|unique|index(?:es)?)\b", "keys, constraints or indexes"),
    ),
    system_prompt=SYSTEM_PROMPT,
)
