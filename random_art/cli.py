"""
random_art/cli.py - Command-line interface
"""
import click
import os
import time

from .ast_nodes import ASTNode
from .errors import RandomArtError
from .evaluator import Evaluator
from .grammar import GRAMMARS, create_grammar
from .seeds import parse_seed
from .shader import build_fragment_shader

def tree_options(func):
    """Options shared by every command that builds a tree"""
    func = click.option('--grammar', '-g', type=click.Choice(sorted(GRAMMARS)), default='perrig-song',
                        help='Grammar used to build the expression tree')(func)
    func = click.option('--depth', '-d', default=5, type=click.IntRange(min=0),
                        help='Depth of the expression tree to generate')(func)
    func = click.option('--seed', '-s', default=None,
                        help='Seed (string or integer); defaults to the current time')(func)
    return func

def build_tree(seed: str, depth: int, grammar: str, verbose: bool = False) -> ASTNode:
    seed_value = parse_seed(seed)
    if seed is None:
        click.echo(f"No seed provided, using time-derived seed: {seed_value}", err=True)
    try:
        root = create_grammar(grammar, seed_value).generate_tree(depth)
    except RandomArtError as e:
        raise click.ClickException(f"Could not build tree: {e}")
    if verbose:
        click.echo(f"Grammar: {grammar}, Seed: {seed_value}, Depth: {root.get_depth()}, "
                   f"Nodes: {len(root.get_all_nodes())}")
    return root

@click.group()
def cli():
    """Random Art - images from random expression trees"""
    pass

@cli.command()
@tree_options
@click.option('--out', '-o', default='generated/random_art.png', help='Output filename')
@click.option('--size', default=800, type=click.IntRange(min=1), help='Output width and height in pixels')
@click.option('--t', default=0.0, help='Time parameter value')
@click.option('--frames', default=0, type=click.IntRange(min=0), help='Create animation with N frames')
@click.option('--remap', is_flag=True, help='Map colors with (c + 1) / 2 like the live shader')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def generate(seed, depth, grammar, out, size, t, frames, remap, verbose):
    """Render a random tree to a PNG file"""
    root = build_tree(seed, depth, grammar, verbose)
    evaluator = Evaluator()
    start_time = time.time()

    try:
        if frames > 0:
            out_dir = os.path.splitext(out)[0] + "_anim"
            os.makedirs(out_dir, exist_ok=True)
            click.echo(f"Creating {frames} frame animation...")
            animation_frames = evaluator.create_animation_frames(
                root, num_frames=frames, size=(size, size), remap=remap)
            for i, frame in enumerate(animation_frames):
                frame.save(os.path.join(out_dir, f"frame_{i:04d}.png"))
            click.echo(f"Animation frames saved to: {out_dir}/")
        else:
            out_dir = os.path.dirname(out)
            if out_dir:
                os.makedirs(out_dir, exist_ok=True)
            evaluator.render_image(root, size=(size, size), t=t, filename=out, remap=remap)
            click.echo(f"Image saved: {out}")
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Error during rendering: {e}")

    if verbose:
        click.echo(f"Render time: {time.time() - start_time:.2f}s")

@cli.command()
@tree_options
@click.option('--out', '-o', default=None, help='Write the fragment shader here instead of stdout')
def shader(seed, depth, grammar, out):
    """Emit a GLSL fragment shader that renders the tree live"""
    root = build_tree(seed, depth, grammar)
    source = build_fragment_shader(root)
    if not out:
        click.echo(source)
        return
    try:
        with open(out, 'w') as f:
            f.write(source)
    except OSError as e:
        raise click.ClickException(f"Could not write shader: {e}")
    click.echo(f"Shader saved: {out}")

@cli.command()
@tree_options
def show(seed, depth, grammar):
    """Print the expression tree"""
    root = build_tree(seed, depth, grammar)
    click.echo(str(root))
    click.echo(f"Depth: {root.get_depth()}, Nodes: {len(root.get_all_nodes())}")

if __name__ == '__main__':
    cli()
