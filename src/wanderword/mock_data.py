"""Canned word journeys served by the mock backend."""

MOCK_JOURNEYS = {
    "coffee": {
        "word": "coffee",
        "currentMeaning": "A dark brown stimulating drink made from roasted and ground seeds of the coffee plant",
        "origin": {
            "word": "qahwah",
            "language": "Arabic",
            "meaning": "Wine; a stimulating dark beverage",
            "location": {"name": "Mokha, Yemen", "countryCode": "YE", "coordinates": [43.25, 13.32]},
            "century": "15th Century",
        },
        "journey": [
            {
                "order": 1,
                "word": "kahve",
                "language": "Ottoman Turkish",
                "location": {"name": "Istanbul, Turkey", "countryCode": "TR", "coordinates": [28.98, 41.01]},
                "century": "16th Century",
                "routeType": "land",
                "notes": "Spread through Ottoman Empire trade routes",
            },
            {
                "order": 2,
                "word": "caffè",
                "language": "Italian",
                "location": {"name": "Venice, Italy", "countryCode": "IT", "coordinates": [12.34, 45.44]},
                "century": "17th Century",
                "routeType": "sea",
                "notes": "Venetian merchants brought coffee from Ottoman ports",
            },
            {
                "order": 3,
                "word": "café",
                "language": "French",
                "location": {"name": "Paris, France", "countryCode": "FR", "coordinates": [2.35, 48.86]},
                "century": "17th Century",
                "routeType": "land",
                "notes": "French coffeehouses became cultural centers",
            },
            {
                "order": 4,
                "word": "coffee",
                "language": "English",
                "location": {"name": "London, England", "countryCode": "GB", "coordinates": [-0.12, 51.51]},
                "century": "17th Century",
                "routeType": "sea",
                "notes": "First London coffeehouse opened 1652",
            },
        ],
        "narrative": "The word 'coffee' embarks on a rich linguistic and geographic journey...",
        "routeSummary": "MARITIME_TRADE",
        "funFact": "The first European coffeehouse opened in Venice in 1629.",
    },
    "tea": {
        "word": "tea",
        "currentMeaning": "An aromatic beverage prepared by pouring hot water over cured leaves of the Camellia sinensis plant",
        "origin": {
            "word": "茶 (chá)",
            "language": "Chinese (Mandarin)",
            "meaning": "The tea plant and beverage",
            "location": {"name": "Fujian Province, China", "countryCode": "CN", "coordinates": [118.0, 26.0]},
            "century": "3rd Century BCE",
        },
        "journey": [
            {
                "order": 1,
                "word": "tê",
                "language": "Min Chinese (Hokkien)",
                "pronunciation": "te",
                "location": {"name": "Xiamen, China", "countryCode": "CN", "coordinates": [118.08, 24.48]},
                "century": "16th Century",
                "routeType": "land",
                "notes": "Maritime trade variant pronunciation",
            },
            {
                "order": 2,
                "word": "thee",
                "language": "Dutch",
                "location": {"name": "Amsterdam, Netherlands", "countryCode": "NL", "coordinates": [4.9, 52.37]},
                "century": "17th Century",
                "routeType": "sea",
                "notes": "Dutch East India Company brought tea from Fujian",
            },
            {
                "order": 3,
                "word": "tea",
                "language": "English",
                "location": {"name": "London, England", "countryCode": "GB", "coordinates": [-0.12, 51.51]},
                "century": "17th Century",
                "routeType": "sea",
                "notes": "Borrowed from Dutch traders",
            },
        ],
        "narrative": "The word 'tea' follows the maritime Silk Road from China to Europe...",
        "routeSummary": "MARITIME_SILK_ROAD",
        "funFact": "'Tea'-like words indicate maritime trade, 'cha'-like words indicate overland Silk Road trade.",
    },
}
