"""
Bundled icebreaker prompt decks used by the reference board codec.
Each deck needs at least 24 distinct prompts.
"""

DEFAULT_DECKS = {
    "Team Social": [
        "Has worked remotely from another country",
        "Speaks three or more languages",
        "Has run a marathon",
        "Owns more than two pets",
        "Has met a celebrity",
        "Plays a musical instrument",
        "Was born in a leap year",
        "Has never broken a bone",
        "Drinks no coffee at all",
        "Has been on TV",
        "Can solve a Rubik's cube",
        "Has lived in five or more cities",
        "Knows how to knit",
        "Has a twin",
        "Has gone skydiving",
        "Reads more than 20 books a year",
        "Grew up on a farm",
        "Has climbed a mountain",
        "Can cook a signature dish",
        "Has a houseplant older than five years",
        "Once worked in a restaurant",
        "Collects something unusual",
        "Has seen the northern lights",
        "Has been to every continent but one",
        "Is left-handed",
        "Has done stand-up comedy",
        "Still has their first phone",
        "Learned to code before age twelve",
    ],
    "Conference": [
        "Gave a talk this year",
        "Flew in for this event",
        "Has a sticker-covered laptop",
        "Attended the first edition",
        "Is here with their whole team",
        "Maintains an open source project",
        "Came straight from the airport",
        "Has a blog post about this topic",
        "Met a colleague here for the first time",
        "Switched careers into tech",
        "Is hiring right now",
        "Has a podcast",
        "Wrote a book",
        "Volunteers at meetups",
        "Took notes on paper",
        "Brought a board game",
        "Knows the keynote speaker",
        "Is attending their first conference",
        "Has mentored someone this year",
        "Uses a split keyboard",
        "Has given a lightning talk",
        "Travelled more than 5000 km",
        "Is wearing a conference shirt from another event",
        "Has contributed to a language spec",
        "Works fully remote",
        "Has a cat appear on video calls",
        "Has won a hackathon",
        "Started a company",
    ],
    "Classroom": [
        "Has a sibling in the same school",
        "Walked to class today",
        "Plays on a sports team",
        "Has read the whole reading list",
        "Can name every planet in order",
        "Has been to a science fair",
        "Likes pineapple on pizza",
        "Has a library card",
        "Was born in another country",
        "Can whistle a tune",
        "Has a summer job",
        "Knows sign language",
        "Has built a robot",
        "Is an only child",
        "Has performed on stage",
        "Has a pen pal",
        "Loves mathematics",
        "Has planted a tree",
        "Can juggle",
        "Has a favorite dinosaur",
        "Keeps a journal",
        "Has visited a museum this year",
        "Can draw a map of the town",
        "Has camped outdoors",
        "Knows a magic trick",
        "Has made a short film",
        "Speaks a second language at home",
        "Has taught someone to ride a bike",
    ],
}
