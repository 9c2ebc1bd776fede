import argparse
import datetime
import random


SUBJECTS = [
    "cwid-rgcryst",
    "cwid-jsmith",
    "cwid-akumar",
    "cwid-mchen",
    "cwid-lgarcia",
]

PREDICATES = [
    "http://www.w3.org/2000/01/rdf-schema#label",
    "http://www.w3.org/1999/02/22-rdf-syntax-ns#type",
    "http://vivoweb.org/ontology/core#relatedBy",
]

NOISE = [
    "INFO  [VClassGroupCache] Rebuilding VClassGroupCache",
    "DEBUG [RequestFilter] request completed",
    "WARN  [FreemarkerHttpServlet] template not found: page-home.ftl",
]


def random_query(rng: random.Random) -> str:
    subject = rng.choice(SUBJECTS)
    predicate = rng.choice(PREDICATES)
    kind = rng.choice(["sparqlSelectQuery", "sparqlConstructQuery"])
    return (
        f"{kind} [JSON, SELECT * WHERE {{  "
        f"<http://vivo.med.cornell.edu/individual/{subject}> <{predicate}> ?o }}]"
    )


def generate_query_logs(
    filename="RDFService.log",
    target_lines=1000,
    seed=None,
    timestamped=True,
    marker="[RDFServiceLogger]",
):
    """
    Write a synthetic query log, mixing record lines with unrelated noise.

    Queries are drawn from a small pool so repeats are common.
    Returns the number of record lines written.
    """
    rng = random.Random(seed)
    current_time = datetime.datetime(2015, 5, 29, 17, 30, 1, 474000)
    records = 0

    with open(filename, "w") as f:
        for _ in range(target_lines):
            current_time += datetime.timedelta(milliseconds=rng.randint(1, 2500))
            ts = current_time.strftime("%Y-%m-%d %H:%M:%S,") + f"{current_time.microsecond // 1000:03d}"

            if rng.random() < 0.2:
                body = rng.choice(NOISE)
            else:
                elapsed = rng.choice([0.001, 0.002, 0.015, 0.120, 1.5]) * rng.randint(1, 4)
                body = f"INFO  {marker}    {elapsed:.3f} {random_query(rng)}"
                records += 1

            f.write((f"{ts} {body}" if timestamped else body) + "\n")

    return records


def parse_args():
    parser = argparse.ArgumentParser(description="Generate a synthetic query log")
    parser.add_argument("filename", nargs="?", default="RDFService.log")
    parser.add_argument("--lines", type=int, default=1000)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--plain", action="store_true", help="Omit timestamps")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    written = generate_query_logs(
        args.filename,
        target_lines=args.lines,
        seed=args.seed,
        timestamped=not args.plain,
    )
    print(f"Generated {args.lines} lines ({written} query records) in {args.filename}")
