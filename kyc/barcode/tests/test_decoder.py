from django.test import SimpleTestCase, Client

from kyc.core.frames import BarcodeCandidate
from kyc.barcode.services.decoder import BarcodeFieldDecoder, to_canonical, aamva_license, segment_elements
from kyc.barcode.services.provider import select_candidate

ANSI_PAYLOAD = (
    "@\n\x1e\rANSI 636001080002DL00410278ZN03190008DLDAQA1234567\n"
    "DCSSMITH\n"
    "DACJANE\n"
    "DBB04151985\n"
    "DBA04152027\n"
    "DBC2\n"
    "DAU065 in\n"
    "DAYBRO\n"
    "DAG123 MAIN ST\n"
    "DAIALBANY\n"
    "DAJNEW YORK\n"
    "DAK122040000\n"
    "DCAZ9999999\n"
    "DCFNONE\n"
    "ZNZSAMPLE\n"
)

AAMVA_PAYLOAD = "^DCSDOE$DACJOHN$DBB01011990$DBA01012030$DCAC1234567"


class AnsiDecodeTest(SimpleTestCase):
    def setUp(self):
        self.decoder = BarcodeFieldDecoder()

    def test_state_is_proper_cased(self):
        native, shape = self.decoder.decode_native(ANSI_PAYLOAD)
        self.assertEqual(shape, "ansi")
        self.assertEqual(native["State"], "New York")

    def test_minimal_ansi_state(self):
        payload = "ANSI 636001080002DL00410278\nDAJNEW YORK"
        self.assertEqual(self.decoder.decode_native(payload)[0]["State"], "New York")

    def test_header_license_wins_over_dca(self):
        native, _ = self.decoder.decode_native(ANSI_PAYLOAD)
        self.assertEqual(native["License Number"], "A1234567")

    def test_numeric_header_license(self):
        payload = "ANSI 636014040002DL00410278ZN03190008DLDAQ123456789\nDCSSMITH"
        native, _ = self.decoder.decode_native(payload)
        self.assertEqual(native["License Number"], "123456789")

    def test_header_line_elements(self):
        payload = "ANSI 636014040002DL00410278ZN03190008DLDAQ123456789DCSSMITH\nDACJANE"
        native, _ = self.decoder.decode_native(payload)
        self.assertEqual(native["Last Name"], "Smith")
        self.assertEqual(native["First Name"], "Jane")
        self.assertEqual(native["License Number"], "123456789")

    def test_later_line_overrides_header_element(self):
        payload = "ANSI 636014040002DL00410278DLDAQ123456789DCSSMITH\nDCSJONES"
        native, _ = self.decoder.decode_native(payload)
        self.assertEqual(native["Last Name"], "Jones")

    def test_elements(self):
        native, _ = self.decoder.decode_native(ANSI_PAYLOAD)
        self.assertEqual(native["Last Name"], "Smith")
        self.assertEqual(native["First Name"], "Jane")
        self.assertEqual(native["Date of Birth"], "04/15/1985")
        self.assertEqual(native["Expiration Date"], "04/15/2027")
        self.assertEqual(native["Sex"], "Female")
        self.assertEqual(native["Height"], "5'5\"")
        self.assertEqual(native["City"], "Albany")
        self.assertEqual(native["ZIP Code"], "122040000")
        self.assertEqual(native["Street Address"], "123 Main ST")

    def test_sentinel_and_unknown_codes(self):
        native, _ = self.decoder.decode_native(ANSI_PAYLOAD)
        self.assertNotIn("Restrictions", native)
        self.assertEqual(native["Znz"], "SAMPLE")

    def test_canonical_keys(self):
        fields = self.decoder.decode(ANSI_PAYLOAD)
        self.assertEqual(fields["Name"], "Jane Smith")
        self.assertEqual(fields["Driver License Number"], "A1234567")
        self.assertEqual(fields["Address"], "123 Main ST")
        self.assertEqual(fields["Last Name"], "Smith")


class AamvaDecodeTest(SimpleTestCase):
    def setUp(self):
        self.decoder = BarcodeFieldDecoder()

    def test_sample(self):
        native, shape = self.decoder.decode_native(AAMVA_PAYLOAD)
        self.assertEqual(shape, "aamva")
        self.assertEqual(native["Last Name"], "Doe")
        self.assertEqual(native["First Name"], "John")
        self.assertEqual(native["Date of Birth"], "01/01/1990")
        self.assertEqual(native["Expiration Date"], "01/01/2030")
        self.assertEqual(native["License Number"], "C1234567")

    def test_license_suffix_rule(self):
        self.assertEqual(aamva_license("C1234567"), "C1234567")
        self.assertEqual(aamva_license("XX123456789"), "3456789")
        self.assertEqual(aamva_license("ABCDEFGHIJ"), "DEFGHIJ")
        self.assertEqual(aamva_license("AB12"), "AB12")

    def test_last_match_wins(self):
        native, _ = self.decoder.decode_native("^DCSDOE$DCSROE")
        self.assertEqual(native["Last Name"], "Roe")

    def test_sex_and_weight(self):
        native, _ = self.decoder.decode_native("^DBC1$DAW180$DAU072")
        self.assertEqual(native["Sex"], "Male")
        self.assertEqual(native["Weight"], "180 lbs")
        self.assertEqual(native["Height"], "6'0\"")


class RawDecodeTest(SimpleTestCase):
    def setUp(self):
        self.decoder = BarcodeFieldDecoder()

    def test_delimited_codes(self):
        native, shape = self.decoder.decode_native("DCSDOE|DACJOHN|DBB01011990")
        self.assertEqual(shape, "raw")
        self.assertEqual(native["Last Name"], "Doe")
        self.assertEqual(native["First Name"], "John")
        self.assertEqual(native["Date of Birth"], "01/01/1990")

    def test_delimiter_free_codes(self):
        native, _ = self.decoder.decode_native("DCSDOEDACJOHNDBB01011990")
        self.assertEqual(native["Last Name"], "Doe")
        self.assertEqual(native["First Name"], "John")
        self.assertEqual(native["Date of Birth"], "01/01/1990")

    def test_value_containing_a_code_is_not_cut(self):
        native, _ = self.decoder.decode_native("DCSADAMSDACJOHN")
        self.assertEqual(native["Last Name"], "Adams")
        self.assertEqual(native["First Name"], "John")
        self.assertNotIn("Residence Street Address 2", native)

    def test_value_ending_in_a_code(self):
        native, _ = self.decoder.decode_native("DACMICHAELDCSJORDANDBB01011990")
        self.assertEqual(native["First Name"], "Michael")
        self.assertEqual(native["Last Name"], "Jordan")
        self.assertEqual(native["Date of Birth"], "01/01/1990")
        self.assertNotIn("Residence City", native)

    def test_segment_elements(self):
        self.assertEqual(
            segment_elements("DCSDOEDACJOHNDBB01011990"),
            [("DCS", "DOE"), ("DAC", "JOHN"), ("DBB", "01011990")],
        )
        self.assertEqual(segment_elements("NOTHINGHERE"), [])

    def test_first_match_wins(self):
        native, _ = self.decoder.decode_native("DCSDOE|DCSROE")
        self.assertEqual(native["Last Name"], "Doe")

    def test_text_patterns(self):
        native, _ = self.decoder.decode_native("JOHN Q PUBLIC DOB 01/02/1980")
        self.assertEqual(native["Name"], "John Q Public")
        self.assertEqual(native["Date of Birth"], "01/02/1980")

    def test_garbage_is_not_an_error(self):
        self.assertEqual(self.decoder.decode("%%%"), {})
        self.assertEqual(self.decoder.decode(""), {})

    def test_aamva_marker_without_fields_falls_through(self):
        native, shape = self.decoder.decode_native("^")
        self.assertEqual(shape, "raw")
        self.assertEqual(native, {})


class CanonicalRemapTest(SimpleTestCase):
    def test_full_name_preferred(self):
        out = to_canonical({"Full Name": "Jane Q Doe", "First Name": "Jane", "Last Name": "Doe"})
        self.assertEqual(out["Name"], "Jane Q Doe")
        self.assertEqual(out["First Name"], "Jane")

    def test_name_from_parts(self):
        out = to_canonical({"First Name": "Jane", "Middle Name": "Q", "Last Name": "Doe"})
        self.assertEqual(out["Name"], "Jane Q Doe")

    def test_address_fallbacks(self):
        out = to_canonical({"Mailing Address": "PO Box 1"})
        self.assertEqual(out["Address"], "PO Box 1")
        out = to_canonical({"Address": "1 Elm St", "Street Address": "2 Oak St"})
        self.assertEqual(out["Address"], "1 Elm St")

    def test_sentinels_dropped(self):
        out = to_canonical({"Hair Color": "UNK", "Eye Color": "Blu"})
        self.assertNotIn("Hair Color", out)
        self.assertEqual(out["Eye Color"], "Blu")


class CandidateSelectionTest(SimpleTestCase):
    def test_pdf417_preferred(self):
        chosen = select_candidate([
            BarcodeCandidate("LONG QR PAYLOAD ....", "QR", 0.99),
            BarcodeCandidate("A", "PDF417", 0.6),
            BarcodeCandidate("B", "PDF417", 0.9),
        ])
        self.assertEqual(chosen.payload, "B")

    def test_longest_confident_fallback(self):
        chosen = select_candidate([
            BarcodeCandidate("short", "QR", 0.9),
            BarcodeCandidate("much longer payload", "CODE128", 0.7),
            BarcodeCandidate("the longest payload of all", "CODE128", 0.4),
        ])
        self.assertEqual(chosen.payload, "much longer payload")

    def test_nothing_usable(self):
        self.assertIsNone(select_candidate([BarcodeCandidate("x", "QR", 0.2)]))
        self.assertIsNone(select_candidate([]))


class BarcodeApiTest(SimpleTestCase):
    def setUp(self):
        self.client = Client()

    def test_ok(self):
        resp = self.client.post("/api/v1/document/barcode/decode",
                                data={"payload": AAMVA_PAYLOAD}, content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        data = resp.json()
        self.assertEqual(data["shape"], "aamva")
        self.assertEqual(data["fields"]["Name"], "John Doe")
        self.assertEqual(data["fields"]["Driver License Number"], "C1234567")

    def test_candidates(self):
        body = {"candidates": [
            {"payload": "noise", "symbology": "QR", "confidence": 0.9},
            {"payload": AAMVA_PAYLOAD, "symbology": "PDF417", "confidence": 0.8},
        ]}
        resp = self.client.post("/api/v1/document/barcode/decode", data=body, content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.json()["fields"]["Last Name"], "Doe")

    def test_missing_payload(self):
        resp = self.client.post("/api/v1/document/barcode/decode", data={}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
