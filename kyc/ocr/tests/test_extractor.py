from django.test import SimpleTestCase, Client

from kyc.core.frames import TextCandidate
from kyc.ocr.services.extractor import TextFieldExtractor
from kyc.ocr.services.provider import join_candidates

FRONT_TEXT = (
    "NEW YORK DRIVER LICENSE 4d DLN A1234567 1 SMITH JANE MARIE 8 123 MAIN ST "
    "ALBANY, NY 12204 DOB 04/15/1985 ISS 04/15/2019 EXP 04/15/2027 CLASS D "
    "SEX F HGT 5'-05\" WGT 130 EYES BRO HAIR BLN DD 12345678 DONOR"
)


class TextFieldExtractorTest(SimpleTestCase):
    def setUp(self):
        self.extractor = TextFieldExtractor()

    def test_full_front(self):
        f = self.extractor.extract(FRONT_TEXT)
        self.assertEqual(f["State"], "New York")
        self.assertEqual(f["Driver License Number"], "A1234567")
        self.assertEqual(f["Name"], "Smith Jane Marie")
        self.assertEqual(f["Date of Birth"], "04/15/1985")
        self.assertEqual(f["Issue Date"], "04/15/2019")
        self.assertEqual(f["Expiration Date"], "04/15/2027")
        self.assertEqual(f["Class"], "D")
        self.assertEqual(f["Sex"], "Female")
        self.assertEqual(f["Height"], "5'5\" (65\")")
        self.assertEqual(f["Weight"], "130 lbs")
        self.assertEqual(f["Eye Color"], "Bro")
        self.assertEqual(f["Hair Color"], "Bln")
        self.assertEqual(f["City"], "Albany")
        self.assertEqual(f["ZIP Code"], "12204")
        self.assertEqual(f["Address"], "123 Main ST, Albany, NY 12204")
        self.assertEqual(f["Document Discriminator"], "12345678")
        self.assertEqual(f["Organ Donor"], "Yes")

    def test_label_beats_fallback(self):
        f = self.extractor.extract("05/05/2020 DOB 01/02/1980")
        self.assertEqual(f["Date of Birth"], "01/02/1980")

    def test_fallbacks(self):
        f = self.extractor.extract("JOHN Q PUBLIC 01/02/1980 M8 BLU 185 LB")
        self.assertEqual(f["Name"], "John Q Public")
        self.assertEqual(f["Date of Birth"], "01/02/1980")
        self.assertEqual(f["Sex"], "Male")
        self.assertEqual(f["Eye Color"], "Blu")
        self.assertEqual(f["Weight"], "185 lbs")

    def test_sex_label_first(self):
        self.assertEqual(self.extractor.extract("SEX F M8")["Sex"], "Female")

    def test_height_forms(self):
        self.assertEqual(self.extractor.extract("HGT 69")["Height"], "5'9\" (69\")")
        self.assertEqual(self.extractor.extract("HEIGHT 5'9\"")["Height"], "5'9\" (69\")")

    def test_none_values_skipped(self):
        f = self.extractor.extract("REST NONE END NONE")
        self.assertNotIn("Restrictions", f)
        self.assertNotIn("Endorsements", f)

    def test_restricted_fields(self):
        f = self.extractor.extract(FRONT_TEXT, fields=["Date of Birth"])
        self.assertEqual(f, {"Date of Birth": "04/15/1985"})

    def test_empty(self):
        self.assertEqual(self.extractor.extract(""), {})
        self.assertEqual(self.extractor.extract("   "), {})


class JoinCandidatesTest(SimpleTestCase):
    def test_join_and_average(self):
        text, conf = join_candidates([TextCandidate("DOB", 0.8), TextCandidate("01/02/1980", 0.6)])
        self.assertEqual(text, "DOB 01/02/1980")
        self.assertAlmostEqual(conf, 0.7)

    def test_empty(self):
        self.assertEqual(join_candidates([]), ("", 0.0))


class TextExtractApiTest(SimpleTestCase):
    def setUp(self):
        self.client = Client()

    def test_candidates(self):
        body = {"candidates": [
            {"text": "NEW YORK DRIVER LICENSE", "confidence": 0.9},
            {"text": "DOB 04/15/1985 CLASS D", "confidence": 0.7},
        ]}
        resp = self.client.post("/api/v1/document/text/extract", data=body, content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        data = resp.json()
        self.assertAlmostEqual(data["confidence"], 0.8)
        self.assertEqual(data["fields"]["State"], "New York")
        self.assertEqual(data["fields"]["Class"], "D")

    def test_text(self):
        resp = self.client.post("/api/v1/document/text/extract", data={"text": "EXP 01/01/2030"},
                                content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.json()["fields"]["Expiration Date"], "01/01/2030")

    def test_missing_body(self):
        resp = self.client.post("/api/v1/document/text/extract", data={}, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
