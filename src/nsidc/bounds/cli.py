import sys

import click

from nsidc.bounds import __version__
from nsidc.bounds import bounds
from nsidc.bounds import config
from nsidc.bounds.errors import BoundsError
from nsidc.bounds.models import BoundaryMethod, HullAlgorithm, OutputFormat


def io_options(fn):
    """Options shared by every boundary command."""
    options = [
        click.argument('source', type=click.File('r'), default='-', required=False),
        click.option('-c', '--config', 'config_filename', help='Path to configuration file'),
        click.option('-d', '--delimiter', help='Input record delimiter, guessed from the first record if omitted.'),
        click.option('-r', '--record', help="Input record layout, the positions of 'x' and 'y' select the fields (e.g. zdyx)."),
        click.option('-s', '--skip', type=int, help='Number of input lines to skip.'),
        click.option('-f', '--format', 'output_format', type=click.Choice([f.value for f in OutputFormat]),
                     help='Output format.'),
        click.option('-n', '--name', 'layer_name', help='Output layer name (gmt and geojson).'),
        click.option('--no-header', is_flag=True, help='Omit the gmt or geojson header.'),
        click.option('-t', '--timeout', type=float, help='Give up after this many seconds.'),
        click.option('-v', '--verbose', is_flag=True, help='Increase the verbosity.'),
        click.option('--log-file', help='Also write a detailed log to this file.'),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _run(method, source, config_filename, verbose, log_file, no_header, **overrides):
    bounds.init_logging(verbose, log_file)
    overrides['method'] = method.value
    overrides['header'] = False if no_header else None
    # Option names differ from the configuration keys they override
    overrides['format'] = overrides.pop('output_format', None)
    overrides['name'] = overrides.pop('layer_name', None)

    try:
        if config_filename:
            cfg_parser = config.config_parser_factory(config_filename)
        else:
            cfg_parser = config.default_config_parser()
        configuration = config.configuration(cfg_parser, overrides)
        config.validate(configuration)
        bounds.process(configuration, source, sys.stdout)
    except (config.ValidationError, BoundsError, ValueError, OSError) as e:
        click.echo(f"Unable to generate boundary: {e}", err=True)
        sys.exit(1)


@click.group(invoke_without_command=True,
             epilog="For detailed help on each command, run: bounds COMMAND --help")
@click.version_option(__version__, prog_name='bounds')
@click.pass_context
def cli(ctx):
    """The bounds utility generates a boundary of a set of xy points read
    from FILE, or standard input, and writes it to standard output. All
    option values must be in the same units as the input xy data. Without a
    command, the convex hull of standard input is written."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(convex)

@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file to display', required=True)
def info(config_filename):
    """Summarizes the contents of a configuration file."""
    try:
        configuration = config.configuration(config.config_parser_factory(config_filename), {})
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    configuration.show()

@cli.command()
@click.option('-w', '--package-wrap', is_flag=True, help='Use a package wrap instead of a monotone chain.')
@io_options
def convex(package_wrap, **options):
    """Convex hull boundary (the default boundary)."""
    algorithm = HullAlgorithm.GIFT_WRAP.value if package_wrap else None
    _run(BoundaryMethod.CONVEX, algorithm=algorithm, **options)

@cli.command()
@click.option('-D', '--distance', type=float,
              help='Distance threshold; omit or use 0 to estimate it from the point density.')
@io_options
def concave(distance, **options):
    """Concave hull boundary using a distance weighted package wrap. The
    result contains every input point, using whatever distance is needed
    to accomplish that."""
    _run(BoundaryMethod.CONCAVE, distance=distance, **options)

@cli.command()
@click.option('-i', '--increment', type=float, help='Block size in input units (e.g. 0.001).')
@click.option('-R', '--region', help='Blocking region as west/east/south/north.')
@io_options
def block(increment, region, **options):
    """'Bounding block' boundary: grids the points and traces the outline of
    the occupied cells, possibly as several polygons."""
    _run(BoundaryMethod.BLOCK, increment=increment, region=region, **options)

@cli.command()
@click.option('-R', '--region', help='Box region as west/east/south/north, instead of the data extent.')
@io_options
def box(region, **options):
    """Bounding box boundary."""
    _run(BoundaryMethod.BOX, region=region, **options)

if __name__ == "__main__":
    cli()
