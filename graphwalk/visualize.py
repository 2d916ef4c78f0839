import argparse
import json
import logging
import os
import sys
import time

from .errors import GraphWalkError
from .session import GraphSession
from .svg import write_svg


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Render the traversal canvas graph as SVG, optionally after a BFS/DFS"
    )
    parser.add_argument(
        "--svg",
        default="output/graph.svg",
        help="Path to output SVG (default: output/graph.svg, empty to skip)",
    )
    parser.add_argument(
        "--json-out",
        default="",
        help="Optional path to write the final frame as JSON",
    )
    parser.add_argument(
        "--width",
        type=float,
        default=1100.0,
        help="Viewport width in pixels (default: 1100)",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=720.0,
        help="Viewport height in pixels (default: 720)",
    )
    parser.add_argument(
        "--delete-edge",
        nargs=2,
        type=int,
        action="append",
        default=[],
        metavar=("U", "V"),
        help="Delete directed edge U->V before traversing (repeatable)",
    )
    parser.add_argument(
        "--traverse",
        choices=["none", "bfs", "dfs"],
        default="none",
        help="Traversal to run (default: none)",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=1,
        help="Start node for the traversal (default: 1)",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Hold each traversal frame for its display delay",
    )
    parser.add_argument(
        "--frames-dir",
        default="",
        help="Write one SVG per traversal frame into this directory",
    )
    legend = parser.add_mutually_exclusive_group()
    legend.add_argument(
        "--legend",
        action="store_true",
        default=True,
        help="Show info legend (default: on)",
    )
    legend.add_argument(
        "--no-legend",
        action="store_false",
        dest="legend",
        help="Hide info legend",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine events",
    )
    return parser.parse_args(argv)


def describe_frame(frame):
    active = ", ".join(str(n) for n in sorted(frame.active))
    if frame.done:
        return "{} done: {} node(s) visited".format(frame.kind, len(frame.visited))
    if frame.kind == "bfs":
        return "bfs level {}: [{}]".format(frame.level, active)
    return "dfs step {}: [{}]".format(frame.level, active)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        session = GraphSession(width=args.width, height=args.height)
    except GraphWalkError as exc:
        print(str(exc))
        return 1

    for u, v in args.delete_edge:
        if session.store.remove_edge(u, v):
            print("Deleted edge {} -> {}".format(u, v))
        else:
            print("No edge {} -> {}, skipped".format(u, v))

    if args.traverse != "none":
        if args.start not in session.store:
            print("Unknown start node: {}".format(args.start))
            return 2
        if args.frames_dir:
            os.makedirs(args.frames_dir, exist_ok=True)
        counter = [0]

        def on_frame(frame):
            print(describe_frame(frame))
            if args.frames_dir:
                counter[0] += 1
                path = os.path.join(args.frames_dir, "frame_{:03d}.svg".format(counter[0]))
                write_svg(path, session.frame(), args.width, args.height, session.config.palette, args.legend)

        run = session.start_traversal(args.traverse, args.start)
        sleep = time.sleep if args.animate else (lambda _delay: None)
        session.traversal.run(run, sleep=sleep, on_frame=on_frame)
        session.run = None
        if args.frames_dir:
            print("{} frame(s) written to {}".format(counter[0], args.frames_dir))

    frame = session.frame()
    print("components={} visited={}".format(frame.info["components"], frame.info["visited"]))

    if args.svg:
        os.makedirs(os.path.dirname(args.svg) or ".", exist_ok=True)
        write_svg(args.svg, frame, args.width, args.height, session.config.palette, args.legend)
        print("SVG written to {}".format(args.svg))

    if args.json_out:
        os.makedirs(os.path.dirname(args.json_out) or ".", exist_ok=True)
        with open(args.json_out, "w", encoding="utf-8") as handle:
            json.dump(frame.to_dict(), handle, ensure_ascii=False)
        print("JSON written to {}".format(args.json_out))
    return 0


if __name__ == "__main__":
    sys.exit(main())
