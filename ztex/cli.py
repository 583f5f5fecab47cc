import os
import sys
import logging
import argparse
import platform

from . import __version__
from .support.logging import dump_hex
from .device import ZtexDeviceError, VID_ZTEX, PID_ZTEX
from .device.capability import Capability
from .device.status import conventions
from .device.command import ZtexDevice
from .device.hardware import ZtexHardwareDevice, CONTROL_TIMEOUT


# When running as `-m ztex.cli`, `__name__` is `__main__`, and the real name
# can be retrieved from `__loader__.name`.
logger = logging.getLogger(__loader__.name)


def version_info():
    python_version = ".".join(map(str, sys.version_info[:3]))
    python_implementation = platform.python_implementation()
    return f"ztex {__version__} ({python_implementation} {python_version} on {platform.platform()})"


def usb_id(value):
    return int(value, 16)


def create_argparser():
    parser = argparse.ArgumentParser(prog="ztex",
        description="Inspect and reset ZTEX USB-FPGA modules.")

    parser.add_argument(
        "-V", "--version", action="version", version=version_info(),
        help="show version and exit")
    parser.add_argument(
        "-v", "--verbose", default=0, action="count",
        help="increase logging verbosity")
    parser.add_argument(
        "-q", "--quiet", default=0, action="count",
        help="decrease logging verbosity")
    parser.add_argument(
        "-L", "--log-file", metavar="FILE", type=argparse.FileType("w"),
        help="save log messages at highest verbosity to FILE")
    parser.add_argument(
        "--no-shorten", default=False, action="store_true",
        help="do not shorten hex dumps in logs")
    parser.add_argument(
        "--vid", metavar="VID", type=usb_id, default=VID_ZTEX,
        help="use device with USB vendor ID VID (default: %(default)04x)")
    parser.add_argument(
        "--pid", metavar="PID", type=usb_id, default=PID_ZTEX,
        help="use device with USB product ID PID (default: %(default)04x)")
    parser.add_argument(
        "--timeout", metavar="SECONDS", type=float, default=CONTROL_TIMEOUT,
        help="fail control requests after SECONDS (default: %(default)s)")
    parser.add_argument(
        "--convention", choices=sorted(conventions), default=None,
        help="interpret FPGA status using firmware convention CONVENTION "
             "(default: legacy for interface version 1, required otherwise)")

    subparsers = parser.add_subparsers(dest="action", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser(
        "info", help="display device descriptor and configuration")

    subparsers.add_parser(
        "status", help="display FPGA and flash memory status")

    p_reset = subparsers.add_parser(
        "reset", help="reset a device component")
    p_reset.add_argument(
        "target", choices=("fpga", "fx3", "default-firmware"),
        help="component to reset")

    return parser


class TerminalFormatter(logging.Formatter):
    DEFAULT_COLORS = {
        "TRACE"   : "\033[0m",
        "DEBUG"   : "\033[36m",
        "INFO"    : "\033[1m",
        "WARNING" : "\033[1;33m",
        "ERROR"   : "\033[1;31m",
        "CRITICAL": "\033[1;41m",
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.colors = dict(self.DEFAULT_COLORS)
        for color_override in os.getenv("ZTEX_COLORS", "").split(":"):
            if color_override:
                level, color = color_override.split("=", 1)
                self.colors[level] = f"\033[{color}m"

    def format(self, record):
        color = self.colors.get(record.levelname, "")
        return f"{color}{super().format(record)}\033[0m"


def create_logger():
    root_logger = logging.getLogger()

    term_formatter_args = {"style": "{",
        "fmt": "{levelname[0]:s}: {name:s}: {message:s}"}
    term_handler = logging.StreamHandler()
    if sys.stderr.isatty() and sys.platform != 'win32':
        term_handler.setFormatter(TerminalFormatter(**term_formatter_args))
    else:
        term_handler.setFormatter(logging.Formatter(**term_formatter_args))
    root_logger.addHandler(term_handler)
    return term_handler


def log_level(args):
    return logging.INFO + args.quiet * 10 - args.verbose * 10


def configure_logger(args, term_handler):
    root_logger = logging.getLogger()

    level = log_level(args)
    if level < logging.DEBUG or args.no_shorten:
        dump_hex.limit = None

    if args.log_file:
        file_formatter_args = {"style": "{",
            "fmt": "[{asctime:s}] {levelname:s}: {name:s}: {message:s}"}
        file_handler = logging.StreamHandler(args.log_file)
        file_handler.setFormatter(logging.Formatter(**file_formatter_args))
        root_logger.addHandler(file_handler)
        term_handler.setLevel(level)
        root_logger.setLevel(logging.TRACE)
    else:
        root_logger.setLevel(level)


def print_info(device):
    descriptor = device.descriptor
    print(f"Product:       {descriptor.product_name}")
    print(f"Serial:        {descriptor.serial}")
    print(f"Descriptor:    {descriptor}")
    if device.configuration is None:
        logger.info("device has no MAC EEPROM; board configuration is not available")
    else:
        print(f"Board:         {device.configuration.board}")
        print(f"FPGA:          {device.configuration.fpga}")
        print(f"RAM:           {device.configuration.ram}")
        print(f"Bitstream:     {device.configuration.bitstream}")
    if device.has_capability(Capability.HIGH_SPEED_FPGA_CONFIGURATION):
        print(f"HS endpoint:   {device.high_speed_endpoint()}")
    if device.has_capability(Capability.DEFAULT_FIRMWARE):
        print(f"Default iface: {device.default_interface()}")


def print_status(device):
    if device.has_capability(Capability.FPGA_CONFIGURATION):
        print(f"FPGA:          {device.fpga_status()}")
    else:
        logger.info("device does not support FPGA configuration")
    if device.has_capability(Capability.FLASH_MEMORY):
        print(f"Flash:         {device.flash_status()}")
    else:
        logger.info("device has no flash memory")


def reset(device, target):
    if target == "fpga":
        device.reset_fpga()
    elif target == "fx3":
        device.reset_fx3()
    elif target == "default-firmware":
        device.reset_default_firmware()
    logger.info("reset %s", target)


def main():
    term_handler = create_logger()

    args = create_argparser().parse_args()
    configure_logger(args, term_handler)

    convention = None
    if args.convention is not None:
        convention = conventions[args.convention]

    try:
        with ZtexHardwareDevice(args.vid, args.pid, timeout=args.timeout) as transport:
            device = ZtexDevice(transport, convention=convention)
            if args.action == "info":
                print_info(device)
            elif args.action == "status":
                print_status(device)
            elif args.action == "reset":
                reset(device, args.target)
    except ZtexDeviceError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
