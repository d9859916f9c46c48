import hashlib
import hmac
import threading
import unittest

from quadriga.data.auth import AuthPayload, NonceGenerator, OrderIdentifier, Signer, sign_message


class FrozenClock:
    def __init__(self, values):
        self.values = list(values)

    def __call__(self) -> int:
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


class SignMessageTest(unittest.TestCase):
    def test_matches_hmac_sha256_of_nonce_client_and_key(self) -> None:
        expected = hmac.new(b"secret", b"1500000000000000000" + b"42" + b"apikey", hashlib.sha256).hexdigest()
        self.assertEqual(expected, sign_message("1500000000000000000", "42", "apikey", "secret"))

    def test_is_deterministic(self) -> None:
        first = sign_message("123", "42", "apikey", "secret")
        second = sign_message("123", "42", "apikey", "secret")
        self.assertEqual(first, second)

    def test_distinct_nonces_give_distinct_signatures(self) -> None:
        signatures = {sign_message(str(nonce), "42", "apikey", "secret") for nonce in range(100)}
        self.assertEqual(100, len(signatures))

    def test_signature_is_lowercase_hex(self) -> None:
        signature = sign_message("1", "2", "3", "4")
        self.assertEqual(64, len(signature))
        self.assertEqual(signature.lower(), signature)
        int(signature, 16)


class NonceGeneratorTest(unittest.TestCase):
    def test_consecutive_nonces_strictly_increase(self) -> None:
        generator = NonceGenerator()
        nonces = [int(generator.next()) for _ in range(1000)]
        self.assertTrue(all(b > a for a, b in zip(nonces, nonces[1:])))

    def test_frozen_clock_still_increases(self) -> None:
        generator = NonceGenerator(clock=FrozenClock([500]))
        self.assertEqual(["500", "501", "502"], [generator.next() for _ in range(3)])

    def test_clock_stepping_backwards_does_not_repeat(self) -> None:
        generator = NonceGenerator(clock=FrozenClock([1000, 900, 2000]))
        self.assertEqual(["1000", "1001", "2000"], [generator.next() for _ in range(3)])

    def test_unique_across_threads(self) -> None:
        generator = NonceGenerator(clock=FrozenClock([7]))
        results = []
        lock = threading.Lock()

        def worker() -> None:
            local = [generator.next() for _ in range(200)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(800, len(set(results)))


class SignerTest(unittest.TestCase):
    def test_sign_builds_payload_from_credentials(self) -> None:
        signer = Signer("42", "apikey", "secret", nonce_generator=NonceGenerator(clock=FrozenClock([99])))
        payload = signer.sign()
        self.assertEqual(
            AuthPayload(key="apikey", signature=sign_message("99", "42", "apikey", "secret"), nonce="99"),
            payload,
        )

    def test_body_merges_endpoint_fields(self) -> None:
        signer = Signer("42", "apikey", "secret", nonce_generator=NonceGenerator(clock=FrozenClock([99])))
        body = signer.body(**OrderIdentifier(id="abc").to_dict(), book=None)
        self.assertEqual({"key", "signature", "nonce", "id"}, set(body))
        self.assertEqual("abc", body["id"])
        self.assertEqual("99", body["nonce"])

    def test_secret_is_not_part_of_payload(self) -> None:
        signer = Signer("42", "apikey", "topsecret")
        self.assertNotIn("topsecret", signer.body().values())


if __name__ == "__main__":
    unittest.main()
