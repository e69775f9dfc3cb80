"""Example bracket notation used when no input is supplied."""

DEFAULT_SOURCE = """
[S 
  [NP [N Ash] ]
  [VP
    [V caught]
    [NP
      [Det the]
      [NP
        [N Mew]
        [PP
          [P with]
          [NP
            [Det the]
            [NP [N Pokeball] ]
          ]
        ]
      ]
    ]
  ]
]"""
