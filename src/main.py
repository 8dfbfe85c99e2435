import argparse
import dataclasses
import json
import logging
import os
import sys

from acceptance import accepts
from automaton import Automaton
from classification import analyze, is_complete_dfa
from conversion import to_dfa
from errors import AutomatonError
from minimization import MinimizationResult, minimize
from parsing import minimization_result_to_dict, parse_json_automaton, write_automaton
from visualization import edge_labels


def build_arg_parser():
    p = argparse.ArgumentParser(
        description="Convert an automaton (JSON) to a DFA and, optionally, minimize it."
    )
    p.add_argument("input", help="JSON file holding the automaton (epsilon allowed)")
    p.add_argument("-o", "--output", help="Output JSON file. Defaults to next to the input")
    p.add_argument("--no-minimize", action="store_true", help="Do not minimize (emit the raw DFA)")
    p.add_argument("--name", help="Name of the output automaton")
    p.add_argument(
        "-t",
        "--test",
        action="append",
        default=[],
        metavar="STRING",
        help="Test a string against the input and the output automaton (repeatable)",
    )
    p.add_argument("--explain", action="store_true", help="Print the partitioning steps")
    p.add_argument("--edges", action="store_true", help="Print the output automaton's edges")
    p.add_argument("-v", "--verbose", action="store_true", help="Log each algorithm step")
    return p


def describe(a: Automaton, title: str) -> None:
    stats = a.get_stats()
    print(f"{title}: {a.name} ({stats['type']})")
    print(f"States: {stats['states']}, Alphabet: {list(a.alphabet)}")
    if a.state_composition:
        print("State composition:")
        for state in a.states:
            print(f"  {a.get_readable_state_name(state)}")


def print_steps(result: MinimizationResult) -> None:
    for step in result.partitioning_steps:
        print(f"  [{step.step}] {step.description}")
        print(f"      after: {[list(p) for p in step.partitions_after]}")
        for detail in step.split_details:
            if detail.split_occurred:
                print(f"      {detail.symbol!r} splits into {[list(g) for g in detail.split_result]}")
            else:
                print(f"      {detail.symbol!r} does not split")


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        a = parse_json_automaton(args.input)
    except (OSError, AutomatonError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    describe(a, "Automaton loaded")
    analysis = analyze(a)
    for t in analysis.epsilon_transitions:
        print(f"  epsilon transition: {t}")
    for nd in analysis.nondeterministic_transitions:
        print(f"  nondeterministic: {nd.from_state} on {nd.symbol!r} -> {list(nd.destinations)}")

    dfa = to_dfa(a)
    if dfa is not a:
        print()
        describe(dfa, "DFA conversion complete")
    if not is_complete_dfa(dfa):
        print("DFA is incomplete; a dead state will be added before minimizing")

    out_auto = dfa
    if not args.no_minimize:
        result = minimize(dfa)
        out_auto = result.minimized_dfa
        print()
        describe(out_auto, "Minimization complete")
        if args.explain:
            print("Partitioning steps:")
            print_steps(result)

    if args.name:
        out_auto = dataclasses.replace(out_auto, name=args.name)

    for s in args.test:
        original = accepts(a, s)
        converted = accepts(out_auto, s)
        verdict = "accepted" if converted.accepted else "rejected"
        print(f"{s!r}: {verdict} (path {' -> '.join(converted.path or ())})")
        if original.accepted != converted.accepted:
            print(f"  warning: the input automaton {'accepts' if original.accepted else 'rejects'} {s!r}")

    if args.edges:
        for (frm, to), label in edge_labels(out_auto).items():
            print(f"  {frm} --{label}--> {to}")

    out_path = args.output
    if not out_path:
        base, _ = os.path.splitext(args.input)
        suffix = "_dfa" if args.no_minimize else "_dfa_min"
        out_path = f"{base}{suffix}.json"
    try:
        write_automaton(out_auto, out_path)
        if args.explain and not args.no_minimize:
            details_path = os.path.splitext(out_path)[0] + "_steps.json"
            with open(details_path, "w", encoding="utf-8") as f:
                json.dump(minimization_result_to_dict(result), f, ensure_ascii=False, indent=2)
            print(f"Minimization details: {details_path}")
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nInput: {args.input}  ->  Output: {out_path}")
    print(f"Final States: {len(out_auto.states)} | Start: {out_auto.start_state}")
    print(f"Accepting: {list(out_auto.final_states)}")
    print(f"Transitions: {len(out_auto.transitions)}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nProgram interrupted by user")
        sys.exit(0)
