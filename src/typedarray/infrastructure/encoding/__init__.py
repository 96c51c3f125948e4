from ._json import array_to_payload, elements_to_text, payload_to_array
