"""Users inserted on startup when the table holds none."""

SAMPLE_USERS = [
    {
        "userUniqueId": "1",
        "userName": "Aditya Gupta",
        "userEmail": "aditya@gmail.com",
        "userAge": "22",
        "dateOfBirth": "2002-05-15",
        "address": {
            "street": "123 Main Street",
            "city": "Amman",
            "state": "Amman Governorate",
            "zipCode": "11121",
            "country": "Jordan",
        },
    },
    {
        "userUniqueId": "2",
        "userName": "Vanshita Jaiswal",
        "userEmail": "vanshita@gmail.com",
        "userAge": "21",
        "dateOfBirth": "2003-08-22",
        "address": {
            "street": "456 Oak Avenue",
            "city": "Zarqa",
            "state": "Zarqa Governorate",
            "zipCode": "13110",
            "country": "Jordan",
        },
    },
    {
        "userUniqueId": "3",
        "userName": "Sachin Yadav",
        "userEmail": "sachin@gmail.com",
        "userAge": "22",
        "dateOfBirth": "2002-12-10",
        "address": {
            "street": "789 Pine Road",
            "city": "Irbid",
            "state": "Irbid Governorate",
            "zipCode": "21110",
            "country": "Jordan",
        },
    },
]
