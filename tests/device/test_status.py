import unittest

from ztex.device import MalformedLength, UnsupportedOperation
from ztex.device.status import ConfiguredPolarity, ResultScheme, FirmwareConvention, \
    LEGACY_CONVENTION, CURRENT_CONVENTION, convention_for_interface, \
    FPGAResult, FPGAStatus, FlashError, FlashStatus, decode_sector_size


class ConventionTestCase(unittest.TestCase):
    def test_known(self):
        self.assertIs(convention_for_interface(1), LEGACY_CONVENTION)

    def test_unknown(self):
        with self.assertRaises(UnsupportedOperation):
            convention_for_interface(0)
        with self.assertRaises(UnsupportedOperation):
            convention_for_interface(200)

    def test_presets(self):
        self.assertEqual(LEGACY_CONVENTION.polarity, ConfiguredPolarity.ONE_IS_CONFIGURED)
        self.assertEqual(LEGACY_CONVENTION.result_scheme, ResultScheme.BASIC)
        self.assertEqual(CURRENT_CONVENTION.polarity, ConfiguredPolarity.ZERO_IS_CONFIGURED)
        self.assertEqual(CURRENT_CONVENTION.result_scheme, ResultScheme.EXTENDED)


class FPGAStatusTestCase(unittest.TestCase):
    data = b"\x00\x5a\x00\x00\x01\x00\x01\x00\x01"

    def test_decode(self):
        status = FPGAStatus.decode(self.data, CURRENT_CONVENTION)
        self.assertEqual(status.checksum, 0x5a)
        self.assertEqual(status.transferred, 65536)
        self.assertEqual(status.init_pulses, 1)
        self.assertEqual(status.result, FPGAResult.SUCCESS)
        self.assertTrue(status.successful)
        self.assertTrue(status.swapped)
        self.assertEqual(status.encode(), self.data)

    # The meaning of the "configured" byte differs between firmware revisions; both
    # conventions must be exercised whenever this is touched.
    def test_polarity_zero_is_configured(self):
        self.assertTrue(FPGAStatus.decode(b"\x00" + self.data[1:], CURRENT_CONVENTION)
                        .configured)
        self.assertFalse(FPGAStatus.decode(b"\x01" + self.data[1:], CURRENT_CONVENTION)
                         .configured)

    def test_polarity_one_is_configured(self):
        self.assertFalse(FPGAStatus.decode(b"\x00" + self.data[1:], LEGACY_CONVENTION)
                         .configured)
        self.assertTrue(FPGAStatus.decode(b"\x01" + self.data[1:], LEGACY_CONVENTION)
                        .configured)

    def test_polarity_custom(self):
        convention = FirmwareConvention("custom", ConfiguredPolarity.ONE_IS_CONFIGURED,
                                        ResultScheme.EXTENDED)
        status = FPGAStatus.decode(b"\x01" + self.data[1:7] + b"\x03\x00", convention)
        self.assertTrue(status.configured)
        self.assertEqual(status.result, FPGAResult.NO_BITSTREAM)

    def test_result_extended(self):
        for code, result, name in (
            (1, FPGAResult.ALREADY_CONFIGURED, "Already Configured"),
            (2, FPGAResult.FLASH_ERROR, "Flash Error"),
            (3, FPGAResult.NO_BITSTREAM, "No Bitstream"),
            (4, FPGAResult.CONFIGURATION_ERROR, "Configuration Error"),
        ):
            status = FPGAStatus.decode(self.data[:7] + bytes([code]) + b"\x00",
                                       CURRENT_CONVENTION)
            self.assertEqual(status.result, result)
            self.assertEqual(status.result_name, name)
            self.assertFalse(status.successful)
        status = FPGAStatus.decode(self.data[:7] + b"\x09\x00", CURRENT_CONVENTION)
        self.assertIsNone(status.result)
        self.assertEqual(status.result_name, "Unknown Result [9]")

    def test_result_basic(self):
        status = FPGAStatus.decode(self.data[:7] + b"\x02\x00", LEGACY_CONVENTION)
        self.assertIsNone(status.result)
        self.assertFalse(status.successful)
        self.assertEqual(status.result_name, "Not Successful [2]")
        status = FPGAStatus.decode(self.data[:7] + b"\x00\x00", LEGACY_CONVENTION)
        self.assertEqual(status.result_name, "Successful")

    def test_transferred_little_endian(self):
        status = FPGAStatus.decode(b"\x00\x00\x78\x56\x34\x12\x00\x00\x00",
                                   CURRENT_CONVENTION)
        self.assertEqual(status.transferred, 0x12345678)

    def test_wrong_length(self):
        with self.assertRaises(MalformedLength) as cm:
            FPGAStatus.decode(self.data[:8], CURRENT_CONVENTION)
        self.assertEqual(cm.exception.expected, 9)
        self.assertEqual(cm.exception.observed, 8)
        with self.assertRaises(MalformedLength):
            FPGAStatus.decode(self.data + b"\x00", CURRENT_CONVENTION)

    def test_str(self):
        status = FPGAStatus.decode(self.data, CURRENT_CONVENTION)
        self.assertEqual(str(status),
            "Configured(Configured), Checksum(0x5a), Transferred(64KiB (65536B)), Init(1), "
            "Result(Successful), Swapped(Swapped), Convention(current)")
        status = FPGAStatus.decode(b"\x07\x00\x01\x00\x00\x00\x00\x00\x05", LEGACY_CONVENTION)
        self.assertEqual(str(status),
            "Configured(Unknown [7]), Checksum(0x00), Transferred(1B), Init(0), "
            "Result(Successful), Swapped(Unknown [5]), Convention(legacy)")


class SectorSizeTestCase(unittest.TestCase):
    def test_exponent(self):
        self.assertEqual(decode_sector_size(0x800C), 4096)
        self.assertEqual(decode_sector_size(0x8010), 65536)
        self.assertEqual(decode_sector_size(0x8000), 1)

    def test_literal(self):
        self.assertEqual(decode_sector_size(0x1000), 4096)
        self.assertEqual(decode_sector_size(0x0200), 512)
        self.assertEqual(decode_sector_size(0x0000), 0)

    def test_large_exponent(self):
        self.assertEqual(decode_sector_size(0x8040), 1 << 64)


class FlashStatusTestCase(unittest.TestCase):
    def test_decode_exponent(self):
        status = FlashStatus.decode(b"\x01\x0c\x80\x00\x04\x00\x00\x00")
        self.assertTrue(status.enabled)
        self.assertEqual(status.sector_field, 0x800C)
        self.assertEqual(status.sector_size, 4096)
        self.assertEqual(status.sector_count, 1024)
        self.assertEqual(status.capacity, 4 << 20)
        self.assertEqual(status.error, FlashError.NONE)

    def test_decode_literal(self):
        status = FlashStatus.decode(b"\x00\x00\x10\x00\x01\x00\x00\x00")
        self.assertFalse(status.enabled)
        self.assertEqual(status.sector_size, 4096)
        self.assertEqual(status.sector_count, 256)

    def test_roundtrip(self):
        data = b"\x01\x10\x80\x78\x56\x34\x12\x03"
        self.assertEqual(FlashStatus.decode(data).encode(), data)

    def test_errors(self):
        names = ["None", "Command Error", "Timeout Error", "Busy Error", "Pending Error",
                 "Read Error", "Write Error", "Unsupported Error", "Runtime Error"]
        for code, name in enumerate(names):
            status = FlashStatus.decode(b"\x01\x0c\x80\x00\x00\x00\x00" + bytes([code]))
            self.assertEqual(status.error, FlashError(code))
            self.assertEqual(status.error_name, name)

    def test_unknown_error(self):
        status = FlashStatus.decode(b"\x01\x0c\x80\x00\x00\x00\x00\x2a")
        self.assertIsNone(status.error)
        self.assertEqual(status.error_name, "Unknown Error [42]")

    def test_wrong_length(self):
        with self.assertRaises(MalformedLength) as cm:
            FlashStatus.decode(b"\x01\x0c\x80")
        self.assertEqual(cm.exception.expected, 8)
        self.assertEqual(cm.exception.observed, 3)

    def test_str(self):
        status = FlashStatus.decode(b"\x01\x0c\x80\x00\x04\x00\x00\x02")
        self.assertEqual(str(status),
            "Enabled(Enabled), Sector(4KiB (4096B)), Count(1024), Error(Timeout Error)")
        status = FlashStatus.decode(b"\x00\x00\x02\x05\x00\x00\x00\x00")
        self.assertEqual(str(status),
            "Enabled(Disabled), Sector(512B), Count(5), Error(None)")
