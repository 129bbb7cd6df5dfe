import os, sys, argparse, logging
from pathlib import Path
from dotenv import load_dotenv

from errors import ConfigError
from excerpt import ExcerptStatus, find_excerpt
from site_config import SITE, sidebar_labels
from templating import load_templating_config

BASE = Path(__file__).resolve().parent

log = logging.getLogger("site_wrangler")

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Inspect site config and print excerpts of rendered pages.")
    ap.add_argument("--config", default=None, help="templating config (default: $SITE_CONFIG or config.yaml)")
    ap.add_argument("html", nargs="*", help="rendered HTML files to extract excerpts from")
    return ap.parse_args(argv)

def report_excerpts(paths, rules) -> int:
    found = 0
    for i, p in enumerate(paths, 1):
        print(f"   [{i}/{len(paths)}] {p}", flush=True)
        try:
            content = Path(p).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning("cannot read %s: %s", p, e)
            print("      (unreadable)", flush=True)
            continue
        result = find_excerpt({"rendered_content": content}, rules)
        if result.status is ExcerptStatus.FOUND:
            found += 1
            print(f"      {result.text}", flush=True)
        else:
            print("      (no excerpt)", flush=True)
    return found

def main(argv=None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    cfg_path = Path(args.config or os.getenv("SITE_CONFIG") or BASE / "config.yaml")
    print(f">> Loading {cfg_path} …", flush=True)
    try:
        cfg = load_templating_config(cfg_path)
    except ConfigError as e:
        log.error("invalid config: %s", e)
        return 2

    print(">> Directories:", cfg.directories(), flush=True)
    print(">> Passthrough copy:", cfg.passthrough_copy, flush=True)
    print(f">> Excerpt rules: {len(cfg.excerpt_rules)}", flush=True)
    for start, end in cfg.excerpt_rules:
        print(f"   {start} … {end}", flush=True)
    print(f">> Site: {SITE['title']} (theme: {SITE['theme']['color']})", flush=True)
    print(">> Sidebar sections:", ", ".join(sidebar_labels(SITE)), flush=True)

    if args.html:
        found = report_excerpts(args.html, cfg.excerpt_rules)
        print(f">> Excerpts found: {found} / {len(args.html)}", flush=True)
    return 0

if __name__ == "__main__":
    sys.exit(main())
