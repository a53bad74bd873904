from __future__ import annotations

import logging

import click

from .audio import read_audio
from .config import BYTES_PER_PIXEL, TAG_LENGTH, CodecConfig
from .errors import DECRYPTION_FAILED, AuthenticationFailure, FormatError, InputError, ResourceError
from .payload import parse
from .pixels import load_png, unpack
from .session import CipherSession
from .strength import score


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@click.group()
@click.option("-v", "--verbose", count=True, help="Log progress (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, verbose: int):
    """Audio-Cipher CLI: encrypt audio into a PNG image and back."""
    try:
        config = CodecConfig.from_env()
    except InputError as e:
        raise click.ClickException(str(e))
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")
    ctx.obj = config


@cli.command()
@click.option("--in", "in_path", required=True, help="Input audio file (WAV/FLAC/OGG); first channel is used")
@click.option("--out", "out_path", required=True, help="Output image (PNG)")
@click.option("--password", required=True, help="Secret key for AES-256-GCM encryption")
@click.pass_obj
def encrypt(config: CodecConfig, in_path: str, out_path: str, password: str):
    """Encrypt an audio file into a lossless image."""
    try:
        audio = read_audio(in_path)
        with CipherSession(config) as session:
            grid = session.encrypt(audio, password.strip())
            session.export_png(out_path)
    except (InputError, ResourceError) as e:
        raise click.ClickException(str(e))
    height, width = grid.shape[:2]
    click.echo(f"Encrypted image ({width}x{height}) saved to: {out_path}")


@cli.command()
@click.option("--in", "in_path", required=True, help="Input encrypted image (PNG)")
@click.option("--out", "out_path", required=True, help="Output recovered audio (WAV)")
@click.option("--password", required=True, help="Secret key used during encryption")
@click.pass_obj
def decrypt(config: CodecConfig, in_path: str, out_path: str, password: str):
    """Decrypt an image produced by `encrypt` back into a WAV file."""
    try:
        grid = load_png(in_path)
        with CipherSession(config) as session:
            audio = session.decrypt(grid, password.strip())
            session.export_wav(out_path)
    except (FormatError, AuthenticationFailure):
        raise click.ClickException(DECRYPTION_FAILED)
    except (InputError, ResourceError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Recovered {audio.duration:.2f}s at {audio.sample_rate} Hz saved to: {out_path}")


@cli.command()
@click.argument("passphrase")
@click.pass_context
def strength(ctx: click.Context, passphrase: str):
    """Score a passphrase; exits 1 if it is too weak to encrypt with."""
    result = score(passphrase.strip())
    click.echo(f"{result.level.label} (score {result.score})")
    if not result.allowed:
        ctx.exit(1)


@cli.command()
@click.option("--in", "in_path", required=True, help="Encrypted image (PNG)")
@click.pass_obj
def inspect(config: CodecConfig, in_path: str):
    """Show the public header of an encrypted image."""
    try:
        grid = load_png(in_path)
        parsed = parse(unpack(grid), config)
    except FormatError as e:
        raise click.ClickException(f"Not a valid encrypted image: {e}")
    except ResourceError as e:
        raise click.ClickException(str(e))
    height, width = grid.shape[:2]
    samples = max(0, parsed.ciphertext_length - TAG_LENGTH) // 4
    click.echo(f"image:       {width}x{height} ({width * height * BYTES_PER_PIXEL} data bytes)")
    click.echo(f"salt:        {parsed.salt.hex()}")
    click.echo(f"nonce:       {parsed.nonce.hex()}")
    click.echo(f"ciphertext:  {parsed.ciphertext_length} bytes")
    click.echo(f"sample rate: {parsed.sample_rate} Hz")
    click.echo(f"samples:     {samples}")


if __name__ == "__main__":
    cli()
