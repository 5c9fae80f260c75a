from __future__ import annotations
import argparse, sys, json
from thesaurus.core import ThesaurusIndex, ThesaurusConfig, SearchScope, query_combinations

def rewrite(index: ThesaurusIndex, scope: SearchScope, query: str, boost: float):
    rewrites = index.get_query_rewrites(scope, query, boost)
    print(json.dumps(rewrites, indent=2, ensure_ascii=False))

def variants(query: str):
    for variant in query_combinations(query):
        print(variant)

def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Thesaurus query rewriting CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    p_rewrite = sub.add_parser("rewrite", help="Print weighted synonym/expansion rewrites of a query as JSON")
    p_rewrite.add_argument("query", help="Fulltext query")
    p_rewrite.add_argument("--store", type=int, default=1, help="Store id")
    p_rewrite.add_argument("--container", default="quick_search_container", help="Search container name")
    p_rewrite.add_argument("--boost", type=float, default=1.0, help="Original boost of the query")

    p_variants = sub.add_parser("variants", help="Print the word-grouping variants of a query")
    p_variants.add_argument("query", help="Fulltext query")

    sub.add_parser("config", help="Print the effective configuration (defaults + THESAURUS_* env) as JSON")

    args = parser.parse_args(argv)

    if args.command == "variants":
        variants(args.query)
        return
    # ValueError covers pydantic validation, bad env numbers and unreadable dictionary JSON
    try:
        cfg = ThesaurusConfig.from_env()
        if args.command == "config":
            print(cfg.to_json())
            return
        index = ThesaurusIndex.from_config(cfg)
    except (ValueError, OSError) as exc:
        parser.exit(2, f"error: {exc}\n")
    rewrite(index, SearchScope(args.store, args.container), args.query, args.boost)

if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
